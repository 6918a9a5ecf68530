"""
Glob-style file finder with optional `.gitignore` support.

Usage::

    from treeglob.finder import find

    files = find("**/*.py", cwd="src", ignore=["**/__pycache__/**"])
"""

from treeglob.finder.ignore import IgnoreRules
from treeglob.finder.patterns import CompiledMatcher, compile_glob
from treeglob.finder.types import EntryKind, GlobOptions
from treeglob.finder.walker import TreeWalker, find, find_async

__all__ = [
    "CompiledMatcher",
    "EntryKind",
    "GlobOptions",
    "IgnoreRules",
    "TreeWalker",
    "compile_glob",
    "find",
    "find_async",
]

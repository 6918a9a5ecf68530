from treeglob.finder import EntryKind, GlobOptions, find, find_async
from treeglob.upwards import find_file_upwards

__all__ = [
    "EntryKind",
    "GlobOptions",
    "find",
    "find_async",
    "find_file_upwards",
]

"""
Finder entry point: concurrent, depth-bounded directory traversal that
collects entries matching glob patterns.

Traversal is best-effort. A directory that can't be listed (permission
denied, removed mid-walk, not a directory) is logged and contributes no
matches; the rest of the tree is still searched.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from treeglob.finder.gitignore import load_gitignore_patterns
from treeglob.finder.ignore import IgnoreRules
from treeglob.finder.patterns import CompiledMatcher, compile_glob, normalize_separators
from treeglob.finder.types import EntryKind, GlobOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    name: str
    is_dir: bool
    is_file: bool


def _scan_directory(directory: Path) -> list[_Entry]:
    """
    List a directory with entry types. Symlinks are not followed, so a link
    is neither a file nor a directory here. Runs in a worker thread.
    """
    with os.scandir(directory) as it:
        return [
            _Entry(
                name=entry.name,
                is_dir=entry.is_dir(follow_symlinks=False),
                is_file=entry.is_file(follow_symlinks=False),
            )
            for entry in it
        ]


def _has_extension(name: str) -> bool:
    return os.path.splitext(name)[1] != ""


class TreeWalker:
    """
    Walks one base directory, returning matched paths.

    All state shared between concurrent branches is read-only. Each branch
    returns its own list of matches and the parent concatenates them after
    joining its children, so no locking is needed.
    """

    def __init__(
        self,
        base_dir: Path,
        matchers: Sequence[CompiledMatcher],
        ignore_rules: IgnoreRules,
        *,
        max_depth: int | None = None,
        entry_kind: EntryKind = EntryKind.FILES,
        match_extensionless_files: bool = True,
        absolute: bool = False,
    ) -> None:
        self._base_dir: Path = base_dir
        self._matchers: tuple[CompiledMatcher, ...] = tuple(matchers)
        self._ignore_rules: IgnoreRules = ignore_rules
        self._max_depth: int | None = max_depth
        self._entry_kind: EntryKind = entry_kind
        self._match_extensionless_files: bool = match_extensionless_files
        self._absolute: bool = absolute

    async def run(self) -> list[str]:
        return await self.walk(self._base_dir, 0, "")

    async def walk(self, directory: Path, depth: int, rel_prefix: str) -> list[str]:
        """
        Collect matches in `directory` (at `depth` below the base) and,
        concurrently, in its subdirectories. `rel_prefix` is the base-relative
        POSIX path of `directory` (empty for the base itself).
        """
        if self._max_depth is not None and depth > self._max_depth:
            return []

        try:
            entries = await asyncio.to_thread(_scan_directory, directory)
        except OSError as e:
            logger.warning("Error reading directory %s: %s", directory, e)
            return []

        found: list[str] = []
        subwalks: list[asyncio.Future[list[str]]] = []
        can_descend = self._max_depth is None or depth < self._max_depth

        for entry in entries:
            rel_path = f"{rel_prefix}/{entry.name}" if rel_prefix else entry.name

            if self._ignore_rules.is_ignored(rel_path):
                continue

            if entry.is_dir:
                if self._entry_kind.includes_folders and self._is_match(rel_path):
                    found.append(self._format(rel_path))
                if can_descend:
                    subwalks.append(
                        asyncio.ensure_future(self.walk(directory / entry.name, depth + 1, rel_path))
                    )
            elif entry.is_file and self._entry_kind.includes_files:
                if not self._match_extensionless_files and not _has_extension(entry.name):
                    continue
                if self._is_match(rel_path):
                    found.append(self._format(rel_path))

        if subwalks:
            for branch in await asyncio.gather(*subwalks):
                found.extend(branch)
        return found

    def _is_match(self, rel_path: str) -> bool:
        return any(m.matches(rel_path) for m in self._matchers)

    def _format(self, rel_path: str) -> str:
        if self._absolute:
            return str(self._base_dir.joinpath(*rel_path.split("/")))
        return rel_path


def _normalize_patterns(patterns: str | Sequence[str]) -> list[str]:
    pattern_list = [patterns] if isinstance(patterns, str) else list(patterns)
    for pattern in pattern_list:
        if not isinstance(pattern, str):
            raise TypeError(f"Glob patterns must be strings, got {pattern!r}")
    return [normalize_separators(p) for p in pattern_list]


def _resolve_options(options: GlobOptions | None, overrides: dict[str, Any]) -> GlobOptions:
    if options is not None and overrides:
        raise TypeError("Pass either a GlobOptions instance or keyword options, not both")
    if options is None:
        options = GlobOptions(**overrides)
    options.validate()
    return options


async def find_async(
    patterns: str | Sequence[str],
    options: GlobOptions | None = None,
    **kwargs: Any,
) -> list[str]:
    """
    Find files and/or folders under a base directory matching glob patterns.

    `options` may be a `GlobOptions`, or its fields may be given as keyword
    arguments. Returns base-relative POSIX paths (or absolute paths with
    `absolute=True`) in no particular order.
    """
    opts = _resolve_options(options, kwargs)
    matchers = [compile_glob(p) for p in _normalize_patterns(patterns)]

    base_dir = Path(os.path.abspath(opts.cwd if opts.cwd is not None else os.getcwd()))

    gitignore_lines: list[str] = []
    if opts.use_gitignore:
        gitignore_lines = await asyncio.to_thread(load_gitignore_patterns, base_dir)
    ignore_rules = IgnoreRules.build(opts.ignore_list, gitignore_lines)

    walker = TreeWalker(
        base_dir,
        matchers,
        ignore_rules,
        max_depth=opts.max_depth,
        entry_kind=opts.entry_kind,
        match_extensionless_files=opts.match_extensionless_files,
        absolute=opts.absolute,
    )
    results = await walker.run()
    logger.debug("Found %d matches under %s", len(results), base_dir)
    return results


def find(
    patterns: str | Sequence[str],
    options: GlobOptions | None = None,
    **kwargs: Any,
) -> list[str]:
    """
    Synchronous wrapper around `find_async()`.

    Runs the search in a new event loop, so it can't be called from inside a
    running loop; use `await find_async(...)` there.
    """
    return asyncio.run(find_async(patterns, options, **kwargs))

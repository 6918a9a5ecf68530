"""Option types for the finder."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Which directory entries are eligible for collection."""

    FILES = "files"
    FOLDERS = "folders"
    ALL = "all"

    @property
    def includes_files(self) -> bool:
        return self in (EntryKind.FILES, EntryKind.ALL)

    @property
    def includes_folders(self) -> bool:
        return self in (EntryKind.FOLDERS, EntryKind.ALL)


@dataclass
class GlobOptions:
    """
    Options for `find()`.

    `cwd=None` means the process working directory, resolved once when the
    search starts. `max_depth=None` means unbounded; `0` lists only the
    entries directly inside the base directory. `ignore` accepts a single
    pattern or a sequence; prefix a pattern with `!` to force-include it.
    """

    cwd: str | Path | None = None
    max_depth: int | None = None
    ignore: str | Sequence[str] = field(default_factory=list)
    match_extensionless_files: bool = True
    absolute: bool = False
    use_gitignore: bool = False
    type: EntryKind | str = EntryKind.FILES

    @property
    def ignore_list(self) -> list[str]:
        """`ignore` normalized to a list of strings."""
        if isinstance(self.ignore, str):
            return [self.ignore]
        return list(self.ignore)

    @property
    def entry_kind(self) -> EntryKind:
        """`type` coerced to `EntryKind`; raises `ValueError` if unknown."""
        return EntryKind(self.type)

    def validate(self) -> None:
        """Raise on programmer errors that no search could recover from."""
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise TypeError(f"max_depth must be an int or None, got {self.max_depth!r}")
            if self.max_depth < 0:
                raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        for pattern in self.ignore_list:
            if not isinstance(pattern, str):
                raise TypeError(f"Ignore patterns must be strings, got {pattern!r}")
        valid = [kind.value for kind in EntryKind]
        if self.type not in valid:
            raise ValueError(f"type must be one of {valid}, got {self.type!r}")

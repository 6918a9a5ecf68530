"""Locating a file by walking up the directory tree."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_regular_file(path: Path) -> bool:
    try:
        return stat.S_ISREG(path.lstat().st_mode)
    except (FileNotFoundError, NotADirectoryError, PermissionError):
        return False


def find_file_upwards(
    file_name: str,
    cwd: str | Path | None = None,
    max_depth: int | None = None,
) -> Path | None:
    """
    Look for `file_name` in `cwd`, then in each parent directory. Returns the
    first regular file found (symlinks and directories don't count), or `None`.

    `max_depth` limits how many levels above `cwd` are searched (`0` checks
    only `cwd`); `None` searches up to the filesystem root.
    """
    if not file_name or not isinstance(file_name, str):
        raise ValueError("file_name must be a non-empty string")
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    current = Path(os.path.abspath(cwd if cwd is not None else os.getcwd()))
    depth = 0
    while max_depth is None or depth <= max_depth:
        candidate = current / file_name
        if _is_regular_file(candidate):
            logger.debug("Found %s at %s", file_name, candidate)
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
        depth += 1
    return None

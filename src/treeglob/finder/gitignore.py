"""Reading `.gitignore` lines from the base directory."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read an ignore file and return its non-blank, non-comment lines (trimmed),
    or `None` if the file is missing, unreadable, or not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Ignore file unavailable: %s (%s)", path, e)
        return None
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


def load_gitignore_patterns(directory: Path) -> list[str]:
    """
    Return the patterns of `.gitignore` directly inside `directory`.

    Only this one file is read; nested `.gitignore` files are not discovered.
    A missing or unreadable file contributes no patterns.
    """
    return _read_ignore_file(directory / ".gitignore") or []

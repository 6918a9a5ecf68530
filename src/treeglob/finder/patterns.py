"""
Glob-to-regex compilation for finder patterns.

Supported syntax is deliberately small: `?` matches one character other than
`/`, `*` matches any run of characters other than `/`, and `**/` matches zero
or more whole path segments. Everything else is literal. Matching is always
against the full base-relative POSIX path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_REGEX_SPECIALS = re.compile(r"[.+^${}()|\[\]\\]")


def normalize_separators(text: str) -> str:
    """Convert Windows-style `\\` separators to `/`."""
    return text.replace("\\", "/")


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob pattern into (unanchored) regular expression source.

    Substitution order matters: each step only sees text the earlier steps
    left alone, so `**/` is consumed before the single `*` rule runs.
    A bare `**` not followed by `/` is two single-segment wildcards.
    """
    escaped = _REGEX_SPECIALS.sub(lambda m: "\\" + m.group(0), pattern)
    escaped = escaped.replace("?", "[^/]")
    escaped = escaped.replace("**/", "(?:.+/)?")
    escaped = escaped.replace("*", "[^/]*")
    return escaped


@dataclass(frozen=True)
class CompiledMatcher:
    """An anchored matcher for one glob pattern."""

    pattern: str
    regex: re.Pattern[str]

    def matches(self, rel_path: str) -> bool:
        return self.regex.fullmatch(rel_path) is not None


def compile_glob(pattern: str) -> CompiledMatcher:
    """
    Compile a glob pattern. Never fails: any string is a valid pattern.
    The empty pattern only matches the empty string.
    """
    return CompiledMatcher(pattern=pattern, regex=re.compile(glob_to_regex(pattern)))

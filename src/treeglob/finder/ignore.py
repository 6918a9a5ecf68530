"""Ignore rules: deny patterns plus `!`-negated overrides."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from treeglob.finder.patterns import CompiledMatcher, compile_glob, normalize_separators


@dataclass(frozen=True)
class IgnoreRules:
    """
    Compiled ignore patterns, split into `deny` matchers and `allow_override`
    matchers (from patterns prefixed with `!`).

    An override match always wins: a path matched by any override is never
    ignored, whatever the deny list says and whatever the input order was.
    """

    deny: tuple[CompiledMatcher, ...] = ()
    allow_override: tuple[CompiledMatcher, ...] = ()

    @classmethod
    def build(cls, patterns: Iterable[str], gitignore_lines: Iterable[str] = ()) -> IgnoreRules:
        """Compile explicit patterns followed by `.gitignore` lines."""
        deny: list[CompiledMatcher] = []
        allow_override: list[CompiledMatcher] = []
        for raw in [*patterns, *gitignore_lines]:
            pattern = normalize_separators(raw)
            if pattern.startswith("!"):
                allow_override.append(compile_glob(pattern[1:]))
            else:
                deny.append(compile_glob(pattern))
        return cls(deny=tuple(deny), allow_override=tuple(allow_override))

    def is_ignored(self, rel_path: str) -> bool:
        if any(m.matches(rel_path) for m in self.allow_override):
            return False
        return any(m.matches(rel_path) for m in self.deny)

"""Tests for glob pattern compilation."""

from __future__ import annotations

import pytest

from treeglob.finder.patterns import compile_glob, glob_to_regex, normalize_separators


@pytest.mark.parametrize(
    ("pattern", "path"),
    [
        ("a.ts", "a.ts"),
        ("*.ts", "a.ts"),
        ("*.ts", ".ts"),
        ("?.ts", "a.ts"),
        ("src/*.py", "src/main.py"),
        ("**/*.ts", "a.ts"),
        ("**/*.ts", "sub/c.ts"),
        ("**/*.ts", "a/b/c/d.ts"),
        ("**/node_modules/**", "node_modules/pkg"),
        ("**/node_modules/**", "lib/node_modules/pkg"),
        ("src/**/test_*.py", "src/test_a.py"),
        ("src/**/test_*.py", "src/x/y/test_a.py"),
        ("file(1)+[x].txt", "file(1)+[x].txt"),
        ("$HOME^{a|b}", "$HOME^{a|b}"),
    ],
)
def test_matches(pattern: str, path: str) -> None:
    assert compile_glob(pattern).matches(path)


@pytest.mark.parametrize(
    ("pattern", "path"),
    [
        ("*.ts", "sub/c.ts"),
        ("*.ts", "a.tsx"),
        ("a.ts", "xa.ts"),
        ("?.ts", "ab.ts"),
        ("?.ts", "/.ts"),
        ("*.txt", "aXtxt"),
        ("src", "src/main.py"),
        ("main.py", "src/main.py"),
        ("**/*.ts", "b.js"),
        ("file(1).txt", "file1.txt"),
    ],
)
def test_does_not_match(pattern: str, path: str) -> None:
    assert not compile_glob(pattern).matches(path)


def test_full_match_not_search() -> None:
    matcher = compile_glob("b")
    assert not matcher.matches("abc")
    assert not matcher.matches("b\n")


def test_empty_pattern_matches_only_empty_string() -> None:
    matcher = compile_glob("")
    assert matcher.matches("")
    assert not matcher.matches("a")
    assert not matcher.matches("a/b")


def test_double_star_prefix_matches_zero_directories() -> None:
    assert compile_glob("**/foo").matches("foo")
    assert compile_glob("**/foo").matches("a/b/foo")


def test_trailing_double_star_stays_within_segment() -> None:
    matcher = compile_glob("src/**")
    assert matcher.matches("src/main.py")
    assert not matcher.matches("src/pkg/main.py")


def test_glob_to_regex_substitution_order() -> None:
    assert glob_to_regex("**/*.py") == r"(?:.+/)?[^/]*\.py"
    assert glob_to_regex("a?b") == "a[^/]b"


def test_backslash_is_literal_until_normalized() -> None:
    assert compile_glob("a\\b").matches("a\\b")
    assert compile_glob(normalize_separators("src\\*.py")).matches("src/main.py")


def test_compiled_matcher_keeps_pattern() -> None:
    assert compile_glob("**/*.md").pattern == "**/*.md"

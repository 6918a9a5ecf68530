"""Tests for upward file search."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from treeglob.upwards import find_file_upwards


def test_finds_file_in_start_directory(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_text("A=1\n")
    assert find_file_upwards(".env", cwd=tmp_path) == target


def test_walks_up_to_parent(tmp_path: Path) -> None:
    target = tmp_path / "package.json"
    target.write_text("{}")
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    assert find_file_upwards("package.json", cwd=deep) == target


def test_nearest_file_wins(tmp_path: Path) -> None:
    (tmp_path / "marker").write_text("outer")
    inner = tmp_path / "sub"
    inner.mkdir()
    (inner / "marker").write_text("inner")
    assert find_file_upwards("marker", cwd=inner) == inner / "marker"


def test_max_depth_limits_search(tmp_path: Path) -> None:
    (tmp_path / "marker").write_text("x")
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    assert find_file_upwards("marker", cwd=deep, max_depth=1) is None
    assert find_file_upwards("marker", cwd=deep, max_depth=2) == tmp_path / "marker"


def test_directories_do_not_count(tmp_path: Path) -> None:
    sub = tmp_path / "sub"
    (sub / "marker").mkdir(parents=True)
    (tmp_path / "marker").write_text("x")
    assert find_file_upwards("marker", cwd=sub) == tmp_path / "marker"


def test_symlinks_do_not_count(tmp_path: Path) -> None:
    real = tmp_path / "real.txt"
    real.write_text("x")
    sub = tmp_path / "sub"
    sub.mkdir()
    try:
        os.symlink(real, sub / "real.txt")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    assert find_file_upwards("real.txt", cwd=sub, max_depth=0) is None


def test_not_found_returns_none(tmp_path: Path) -> None:
    assert find_file_upwards("surely-not-a-real-file-name.xyz", cwd=tmp_path) is None


def test_defaults_to_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "marker").write_text("x")
    monkeypatch.chdir(tmp_path)
    assert find_file_upwards("marker") == (tmp_path / "marker").resolve()


def test_empty_name_raises() -> None:
    with pytest.raises(ValueError):
        find_file_upwards("")


def test_negative_max_depth_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        find_file_upwards("x", cwd=tmp_path, max_depth=-1)


def test_symlinked_cwd_is_not_resolved(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    (real / "marker").write_text("x")
    link = tmp_path / "link"
    try:
        os.symlink(real, link, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    assert find_file_upwards("marker", cwd=link) == link / "marker"

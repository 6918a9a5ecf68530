"""
TOML config for the treeglob CLI.

Settings live in `.treeglob.toml`, `treeglob.toml`, or the `[tool.treeglob]`
table of `pyproject.toml`, in the nearest directory at or above the search
base. Precedence when merging: explicit CLI flags > config file > defaults.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class TreeglobConfig:
    """
    Settings read from a config file. `None` means the key was absent, so the
    CLI default (or an explicit flag) stays in effect.
    """

    ignore: list[str] | None = None
    extend_ignore: list[str] | None = None
    max_depth: int | None = None
    use_gitignore: bool | None = None
    match_extensionless_files: bool | None = None
    absolute: bool | None = None
    type: str | None = None


_CONFIG_FILENAMES = (".treeglob.toml", "treeglob.toml")

# TOML keys that don't simply become snake_case field names
_KEY_ALIASES: dict[str, str] = {"gitignore": "use_gitignore"}

# Expected value kind per field: "bool", "int", "str", or "patterns"
_FIELD_KINDS: dict[str, str] = {
    "ignore": "patterns",
    "extend_ignore": "patterns",
    "max_depth": "int",
    "use_gitignore": "bool",
    "match_extensionless_files": "bool",
    "absolute": "bool",
    "type": "str",
}


def _candidates(directory: Path) -> Iterator[Path]:
    for filename in _CONFIG_FILENAMES:
        yield directory / filename
    pyproject = directory / "pyproject.toml"
    if pyproject.is_file() and _has_tool_table(pyproject):
        yield pyproject


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return isinstance(data.get("tool"), dict) and "treeglob" in data["tool"]


def find_config_file(start_dir: Path) -> Path | None:
    """Return the nearest config file at or above `start_dir`, or `None`."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for candidate in _candidates(directory):
            if candidate.is_file():
                return candidate
    return None


def load_config(config_path: Path) -> TreeglobConfig:
    """
    Load settings from `config_path`. Raises `ValueError` for malformed TOML
    (`TOMLDecodeError` is a `ValueError`) or a value of the wrong type.
    """
    data = tomllib.loads(config_path.read_text())
    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("treeglob", {})
    return _parse_config_data(data, source=config_path)


def _check_value(key: str, kind: str, value: Any, source: Path | None) -> Any:
    where = f" in {source}" if source else ""
    if kind == "bool":
        ok = isinstance(value, bool)
    elif kind == "int":
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif kind == "str":
        ok = isinstance(value, str)
    else:
        if isinstance(value, str):
            value = [value]
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
    if not ok:
        expected = "a list of strings" if kind == "patterns" else f"a {kind}"
        raise ValueError(f"Config key {key!r}{where} must be {expected}, got {value!r}")
    return value


def _parse_config_data(data: dict[str, Any], source: Path | None = None) -> TreeglobConfig:
    """Build a `TreeglobConfig` from TOML data, flattening one level of tables."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value

    values: dict[str, Any] = {}
    for key, value in flat.items():
        name = _KEY_ALIASES.get(key, key.replace("-", "_"))
        kind = _FIELD_KINDS.get(name)
        if kind is None:
            continue
        values[name] = _check_value(key, kind, value, source)
    return TreeglobConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: TreeglobConfig | None,
    explicit_flags: set[str],
) -> _T:
    """Copy configured values onto `cli_opts` unless the flag was given explicitly."""
    if config is None:
        return cli_opts
    for cfg_field in fields(TreeglobConfig):
        value = getattr(config, cfg_field.name)
        if value is None or cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, value)
    return cli_opts

#!/usr/bin/env python3
"""
treeglob: Find files and folders matching glob patterns

Common usage:
  treeglob '**/*.py'
  treeglob --cwd src --type all '**/test_*'
  treeglob --gitignore --ignore '**/node_modules/**' '**/*.js'
  treeglob --upwards pyproject.toml

Patterns match whole base-relative paths: `*` and `?` stay within one path
segment, `**/` matches any number of directories. Prefix an ignore pattern
with `!` to force-include paths it matches.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from treeglob.config import find_config_file, load_config, merge_cli_with_config
from treeglob.finder import EntryKind, GlobOptions, find
from treeglob.upwards import find_file_upwards

logger = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the treeglob tool."""

    patterns: list[str]
    cwd: str | None
    ignore: list[str]
    extend_ignore: list[str]
    max_depth: int | None
    use_gitignore: bool
    match_extensionless_files: bool
    absolute: bool
    type: str
    sort: bool
    upwards: str | None
    verbose: bool
    version: bool


# Options field -> built-in default, for flags that a config file may also set.
# These flags default to None in argparse so we can tell whether they were given.
_MERGEABLE_DEFAULTS: dict[str, object] = {
    "ignore": [],
    "extend_ignore": [],
    "use_gitignore": False,
    "match_extensionless_files": True,
    "absolute": False,
    "type": EntryKind.FILES.value,
}


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` names
    the options the user actually passed (for config merge precedence).
    Options not passed are left at their built-in defaults.
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="treeglob",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Glob patterns to match against base-relative paths",
    )
    parser.add_argument(
        "-C",
        "--cwd",
        type=str,
        default=None,
        metavar="DIR",
        help="Base directory to search from (default: current directory)",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Ignore paths matching PATTERN, replacing configured ignores. Can be repeated",
    )
    parser.add_argument(
        "--extend-ignore",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to the configured ignore patterns. Can be repeated",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Descend at most N directory levels below the base (0 = base only)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        default=None,
        dest="use_gitignore",
        help="Also ignore patterns listed in the base directory's .gitignore",
    )
    parser.add_argument(
        "--no-extensionless",
        action="store_const",
        const=False,
        default=None,
        dest="match_extensionless_files",
        help="Skip files without an extension (e.g. Makefile)",
    )
    parser.add_argument(
        "--absolute",
        action="store_true",
        default=None,
        help="Print absolute paths instead of paths relative to the base directory",
    )
    parser.add_argument(
        "--type",
        type=str,
        choices=[kind.value for kind in EntryKind],
        default=None,
        help="Which entries to list (default: files)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort output (by default, order follows traversal and is not stable)",
    )
    parser.add_argument(
        "--upwards",
        type=str,
        default=None,
        metavar="NAME",
        help="Print the nearest file called NAME in the base directory or its parents",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    explicit_flags: set[str] = set()
    for name, default in _MERGEABLE_DEFAULTS.items():
        if getattr(opts, name) is None:
            setattr(opts, name, list(default) if isinstance(default, list) else default)
        else:
            explicit_flags.add(name)
    if opts.max_depth is not None:
        explicit_flags.add("max_depth")

    return (
        Options(
            patterns=opts.patterns,
            cwd=opts.cwd,
            ignore=opts.ignore,
            extend_ignore=opts.extend_ignore,
            max_depth=opts.max_depth,
            use_gitignore=opts.use_gitignore,
            match_extensionless_files=opts.match_extensionless_files,
            absolute=opts.absolute,
            type=opts.type,
            sort=opts.sort,
            upwards=opts.upwards,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _run_upwards(options: Options) -> int:
    found = find_file_upwards(options.upwards or "", cwd=options.cwd, max_depth=options.max_depth)
    if found is None:
        print(f"Error: {options.upwards} not found", file=sys.stderr)
        return 1
    print(found)
    return 0


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the treeglob CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("treeglob")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _setup_logging(options.verbose)

    try:
        if options.upwards:
            return _run_upwards(options)

        if not options.patterns:
            print(
                "Error: No patterns specified. Provide at least one glob pattern"
                " (e.g. '**/*.py'). Use --help for more options.",
                file=sys.stderr,
            )
            return 1

        config_path = find_config_file(Path(options.cwd) if options.cwd else Path.cwd())
        if config_path:
            logger.debug("Using config file %s", config_path)
            merge_cli_with_config(options, load_config(config_path), explicit_flags)

        results = find(
            options.patterns,
            GlobOptions(
                cwd=options.cwd,
                max_depth=options.max_depth,
                ignore=options.ignore + options.extend_ignore,
                match_extensionless_files=options.match_extensionless_files,
                absolute=options.absolute,
                use_gitignore=options.use_gitignore,
                type=options.type,
            ),
        )
    except (OSError, TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.sort:
        results.sort()
    for path in results:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

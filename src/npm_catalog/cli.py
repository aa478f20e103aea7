"""Command line entrypoint for inspecting and updating catalog versions.

Usage:
  npm-catalog [--cwd DIR] [--config FILE] [--set NAME=VERSION ...] [--write]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConfigError, load_options
from .core import check_catalogs
from .io.bun_workspaces import ManifestParseError
from .summary import render_summary


def _parse_target(value: str) -> tuple[str, str]:
    # ranges may contain "=" (">=1.0.0"), package names never do
    name, sep, version = value.partition("=")
    if not sep or not name or not version:
        raise argparse.ArgumentTypeError(f"Expected NAME=VERSION, got {value!r}")
    return name, version


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="npm-catalog", description=__doc__.splitlines()[0])
    parser.add_argument("--cwd", type=Path, default=Path("."), help="Repository root to scan")
    parser.add_argument("--config", type=Path, default=None, help="Path to a config file")
    parser.add_argument(
        "--set",
        dest="targets",
        type=_parse_target,
        action="append",
        default=[],
        metavar="NAME=VERSION",
        help="Target version for a package (repeatable)",
    )
    parser.add_argument("--write", action="store_true", help="Write changes to manifests")
    parser.add_argument("--markdown", action="store_true", help="Print a Markdown summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_options(args.config, cwd=args.cwd)
        report = check_catalogs(options, dict(args.targets), write=args.write)
    except (ConfigError, ManifestParseError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.markdown:
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

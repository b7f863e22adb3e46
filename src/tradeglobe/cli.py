# SPDX-License-Identifier: Apache-2.0
"""Command-line entry point: ``tradeglobe <command> [options]``."""

from __future__ import annotations

import argparse
import sys

from tradeglobe import __version__


def build_parser() -> argparse.ArgumentParser:
    from tradeglobe.visualization import register_cli

    parser = argparse.ArgumentParser(
        prog="tradeglobe",
        description="Render and inspect a country's exports on a rotating globe.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)
    register_cli(sub)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return int(ns.func(ns) or 0)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Command-line entry point for dev-sop-engine.

Usage:
    dev-sop-engine [target-dir] [--dry-run]
"""

import argparse
import os
import sys

from sop_engine import __version__
from sop_engine.cli.generate import cmd_generate

EPILOG = """\
examples:
  dev-sop-engine .              Generate in current directory
  dev-sop-engine ~/my-project   Generate in specified directory

The generated .claude/ includes:
  hooks/engine.sh     Route events to validators
  validators/         Rule enforcement scripts
  loggers/            Event logging
  sop.yaml            Rule configuration
  settings.json       Claude Code hook config

Servers declared under mcpServers in sop.yaml are kept in sync in
.mcp.json on every run. Servers added to .mcp.json by hand are preserved.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dev-sop-engine",
        description="Generate .claude/ directory and sync .mcp.json",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "target", nargs="?", default=None,
        help="Target project directory (default: current directory)",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.target is None:
        args.target = os.getcwd()
    return cmd_generate(args)


if __name__ == "__main__":
    sys.exit(main())

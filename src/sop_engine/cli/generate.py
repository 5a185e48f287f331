"""Generate CLI command."""

import argparse
import sys


def cmd_generate(args: argparse.Namespace) -> int:
    from sop_engine.sync import sync_project

    try:
        result = sync_project(args.target, dry_run=args.dry_run)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(result.summary())
    return 0

#!/usr/bin/env python3
"""
Delete every mapping without a QR code (NULL or empty). Irreversible; use --dry-run first.
Run from backend dir: python scripts/cleanup_mappings.py [--dry-run]
"""
import argparse
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from edubot.jobs import maintenance as jobs  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="list the mappings that would be deleted")
    args = parser.parse_args(argv)
    jobs.configure_logging()
    return jobs.run_job("cleanup_mappings", lambda db: jobs.cleanup_mappings(db, dry_run=args.dry_run))


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Move legacy passage sets (textbook_id / set_number on the row) onto textbook_passage_mappings,
then clear the legacy columns. The missing mapping is created first unless --no-create-mappings.
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
    parser.add_argument(
        "--no-create-mappings",
        action="store_true",
        help="only clear legacy columns (the textbook link is lost if no mapping exists)",
    )
    args = parser.parse_args(argv)
    jobs.configure_logging()
    return jobs.run_job(
        "fix_mapping_issue",
        lambda db: jobs.fix_mapping_issue(db, ensure_mappings=not args.no_create_mappings),
    )


if __name__ == "__main__":
    sys.exit(main())

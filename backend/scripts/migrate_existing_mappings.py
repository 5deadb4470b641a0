#!/usr/bin/env python3
"""
Assign a QR code and URL to mappings missing either (all, or one with --mapping-id).
"""
import argparse
import sys
import uuid
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from edubot.jobs import maintenance as jobs  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--mapping-id", type=uuid.UUID, default=None)
    args = parser.parse_args(argv)
    jobs.configure_logging()
    return jobs.run_job(
        "migrate_existing_mappings",
        lambda db: jobs.migrate_existing_mappings(db, mapping_id=args.mapping_id),
    )


if __name__ == "__main__":
    sys.exit(main())

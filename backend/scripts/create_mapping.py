#!/usr/bin/env python3
"""
Link a passage set into a textbook at the next order, with a fresh mapping QR code.
Usage: python scripts/create_mapping.py <textbook_id> <passage_set_id>
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
    parser.add_argument("textbook_id", type=uuid.UUID)
    parser.add_argument("passage_set_id", type=uuid.UUID)
    args = parser.parse_args(argv)
    jobs.configure_logging()
    return jobs.run_job(
        "create_mapping",
        lambda db: jobs.create_mapping(db, args.textbook_id, args.passage_set_id),
    )


if __name__ == "__main__":
    sys.exit(main())

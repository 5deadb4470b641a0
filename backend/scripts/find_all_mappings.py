#!/usr/bin/env python3
"""
List every table, every textbook_passage_mappings row and textbook ids/titles. Read-only.
Run from backend dir: python scripts/find_all_mappings.py
"""
import argparse
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from edubot.jobs import maintenance as jobs  # noqa: E402


def main(argv=None) -> int:
    argparse.ArgumentParser(description=__doc__).parse_args(argv)
    jobs.configure_logging()
    return jobs.run_job("find_all_mappings", jobs.find_all_mappings)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Print all textbook_passage_mappings rows. Read-only.
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
    return jobs.run_job("check_mappings", jobs.check_mappings)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
OMSC Statistics Report CLI

Scrapes the Online Music Song Contest wiki and writes ranked text reports:
all-time country totals, average country scores, average member placements,
and the editions each country has missed.

Usage:
    python omsc_report.py
    python omsc_report.py --current-edition 42
    python omsc_report.py --current-edition 42 --output-dir dist
"""

import argparse
import logging
import sys
from pathlib import Path

from omsc import FetchError, generate_reports
from omsc.config import get_config
from omsc.logging_config import setup_logging


def edition_number(value: str) -> int:
    """argparse type: a non-negative edition number (0 means infer)."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"edition must be 0 or greater, got {number}")
    return number


def main():
    parser = argparse.ArgumentParser(description="OMSC wiki statistics reports")
    parser.add_argument(
        "--current-edition", "-e",
        type=edition_number,
        default=None,
        help="Edition ceiling and reference edition (defaults to the highest edition found)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory for report files (defaults to output_dir in data/report_config.json)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging (overrides log_level in data/report_config.json)",
    )

    args = parser.parse_args()

    config = get_config()
    logger = setup_logging(
        log_dir=Path(config.log_dir),
        level=logging.DEBUG if args.verbose else config.log_level,
        log_to_file=not args.no_log_file,
    )
    output_dir = Path(args.output_dir) if args.output_dir else None

    try:
        written = generate_reports(
            current_edition=args.current_edition,
            output_dir=output_dir,
            config=config,
        )
    except FetchError as e:
        logger.error(f"Aborting, no reports written: {e}")
        sys.exit(1)

    logger.info(f"Wrote {len(written)} reports")


if __name__ == "__main__":
    main()

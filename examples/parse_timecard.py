#!/usr/bin/env python3
"""
Parse a Timecard and Print Its Shifts

Reads a timecard PDF (or a .txt dump of its extracted text), recovers the
shift records and prints them as JSON together with the expected pay for
the period.

Usage:
    python examples/parse_timecard.py timecard.pdf
    python examples/parse_timecard.py timecard.pdf --rate 18.50 --actual-pay 720
    python examples/parse_timecard.py extracted.txt --timeout 10
"""

import argparse
import json
import sys
from pathlib import Path

from timecard_core import TimecardError, TimecardTextExtractor, parse_timecard
from timecard_core.config import get_settings
from timecard_core.pay import summarize_pay_period


def load_text(path: Path, timeout: float | None) -> str:
    """Return the timecard text, extracting it first when given a PDF."""
    if path.suffix.lower() == ".txt":
        return path.read_text(encoding="utf-8")
    extractor = TimecardTextExtractor(timeout=timeout)
    return extractor.extract(path.read_bytes(), source=path.name)


def main():
    """Main entry point for timecard parsing."""
    parser = argparse.ArgumentParser(
        description="Recover shift records from an exported timecard",
    )
    parser.add_argument(
        "file",
        type=str,
        help="Path to a timecard PDF or a .txt file of its extracted text",
    )
    parser.add_argument(
        "--rate", "-r",
        type=float,
        default=None,
        help="Hourly rate for expected pay (default: configured rate)",
    )
    parser.add_argument(
        "--actual-pay",
        type=float,
        default=None,
        help="Pay actually received, to report the difference",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed for PDF text extraction",
    )
    args = parser.parse_args()

    path = Path(args.file)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    try:
        period = parse_timecard(load_text(path, args.timeout), settings=get_settings())
    except TimecardError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    summary = summarize_pay_period(period, hourly_rate=args.rate, actual_pay=args.actual_pay)
    output = {
        **period.to_dict(),
        "strategy": period.strategy,
        "summary": summary.model_dump(),
    }
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

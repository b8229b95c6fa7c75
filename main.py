#!/usr/bin/env python3
"""
Damm Checksum — Entry Point
===========================

Inspects numbers that should end in their Damm check digit.

Usage:
    python main.py                          # Run the worked examples
    python main.py 5724 438812345670        # Inspect your own numbers
    DAMM_LOG_LEVEL=DEBUG python main.py     # Verbose logging
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from damm_checksum.inspection import ChecksumInspector
from damm_checksum.models import ChecksumReport, Severity

load_dotenv()


# ─── Worked Examples ─────────────────────────────────────────────────

EXAMPLE_NUMBERS = [
    "5724",  # 572 + check digit 4
    "438812345679",  # 43881234567 + check digit 9
    "438812345670",  # last digit corrupted
    "5742",  # adjacent transposition of 5724
    "12a3",  # not a number at all
]


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 60


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(report: ChecksumReport) -> None:
    """Pretty-print a single inspection report."""
    print(f"{'─' * _WIDTH}")
    print(f"  Number:      {_BOLD}{report.number!r}{_RESET}")
    if report.payload is not None:
        print(f"  Payload:     {report.payload!r}")
        print(f"  Check digit: {report.check_digit} "
              f"{_DIM}(expected {report.expected_check_digit}){_RESET}")

    colors = {Severity.ERROR: _RED, Severity.WARNING: _YELLOW, Severity.INFO: _CYAN}
    for f in report.findings:
        print(f"    {colors[f.severity]}[{f.code}]{_RESET} {f.message}")
        for k, v in f.details.items():
            print(f"      {_DIM}{k}: {v}{_RESET}")

    if report.is_valid:
        print(f"  {_GREEN}{_BOLD}VALID{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}INVALID{_RESET}")


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Inspect every number and return the process exit code.

    Returns:
        0 if every number validated, 1 otherwise.
    """
    logging.basicConfig(
        level=os.environ.get("DAMM_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    numbers = sys.argv[1:] if argv is None else argv
    if not numbers:
        numbers = EXAMPLE_NUMBERS

    inspector = ChecksumInspector()
    reports = inspector.inspect_many(numbers)

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  DAMM CHECK DIGIT REPORT{_RESET}")
    print(f"{'=' * _WIDTH}")
    for report in reports:
        print_report(report)

    invalid = sum(1 for r in reports if not r.is_valid)
    print(f"{'=' * _WIDTH}")
    if invalid:
        print(f"  {_RED}{_BOLD}{invalid} of {len(reports)} number(s) rejected{_RESET}")
    else:
        print(f"  {_GREEN}{_BOLD}ALL {len(reports)} NUMBER(S) VALID{_RESET}")
    print(f"{'=' * _WIDTH}\n")

    return 1 if invalid else 0


if __name__ == "__main__":
    sys.exit(main())

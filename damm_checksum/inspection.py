"""
Number inspection — turns the reducer's bool/exception contract into reports.

Flow:
    number
      │
      ├─ malformed?      → ERROR  MALFORMED_INPUT   (position, character)
      ├─ empty?          → ERROR  EMPTY_INPUT
      ├─ fold == 0?      → valid  (INFO PAYLOAD_EMPTY for a lone "0")
      └─ otherwise       → ERROR  CHECKSUM_MISMATCH (expected vs found digit)

The last character is always treated as the check digit. Malformed input
and a mismatching check digit are separate codes, never a shared False.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import MalformedInputError
from .models import ChecksumFinding, ChecksumReport, Severity
from .reducer import append_checksum, reduce
from .table import OPERATION_TABLE, assert_table_integrity

logger = logging.getLogger(__name__)


def inspect_number(number: str) -> ChecksumReport:
    """Inspect a number that should end in its own Damm check digit."""
    try:
        interim = reduce(number)
    except MalformedInputError as exc:
        logger.debug("Malformed input %r: %s", number, exc.message)
        return ChecksumReport(
            number=number,
            is_valid=False,
            findings=[
                ChecksumFinding(
                    severity=Severity.ERROR,
                    code=exc.code,
                    field="number",
                    message=exc.message,
                    details=exc.details,
                )
            ],
        )

    if not number:
        return ChecksumReport(
            number=number,
            is_valid=False,
            findings=[
                ChecksumFinding(
                    severity=Severity.ERROR,
                    code="EMPTY_INPUT",
                    field="number",
                    message="Empty input carries no check digit.",
                )
            ],
        )

    payload, check_digit = number[:-1], int(number[-1])
    # Already known to be all digits, so this cannot raise.
    expected = reduce(payload)

    findings: list[ChecksumFinding] = []
    if not payload:
        findings.append(
            ChecksumFinding(
                severity=Severity.INFO,
                code="PAYLOAD_EMPTY",
                field="number",
                message=(
                    f"'{number}' is a bare check digit; only '0' (the check "
                    f"digit of an empty payload) validates."
                ),
            )
        )

    if interim != 0:
        findings.append(
            ChecksumFinding(
                severity=Severity.ERROR,
                code="CHECKSUM_MISMATCH",
                field="check_digit",
                message=(
                    f"Check digit of '{number}' is {check_digit}, expected "
                    f"{expected}. Corrected number: '{payload}{expected}'."
                ),
                details={
                    "found": check_digit,
                    "expected": expected,
                    "interim": interim,
                    "corrected": f"{payload}{expected}",
                },
            )
        )

    return ChecksumReport(
        number=number,
        is_valid=interim == 0,
        payload=payload,
        check_digit=check_digit,
        expected_check_digit=expected,
        findings=findings,
    )


class ChecksumInspector:
    """One object exposing generation and inspection.

    Usage:
        inspector = ChecksumInspector()
        inspector.generate("572")          # "5724"
        report = inspector.inspect("5724")
        if not report.is_valid:
            for finding in report.findings:
                print(finding.code, finding.message)
    """

    def __init__(self) -> None:
        # Fail at startup, not on the first request, if the table was edited.
        assert_table_integrity(OPERATION_TABLE)
        self.table_verified = True
        logger.info("Damm operation table verified")

    def generate(self, number: str) -> str:
        """Append the check digit; raises MalformedInputError on bad input."""
        result = append_checksum(number)
        logger.debug("Generated %s from %s", result, number)
        return result

    def inspect(self, number: str) -> ChecksumReport:
        report = inspect_number(number)
        if not report.is_valid:
            logger.info(
                "Rejected %r: %s",
                number,
                ", ".join(f.code for f in report.errors),
            )
        return report

    def inspect_many(self, numbers: Iterable[str]) -> list[ChecksumReport]:
        return [self.inspect(number) for number in numbers]

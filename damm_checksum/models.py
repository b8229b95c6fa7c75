"""
Pydantic models for check-digit reports.

The reducer itself works on plain strings and ints. These models are the
typed boundary used by the inspection layer, the HTTP API and the CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ─── Severity Levels ────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of a finding."""

    ERROR = "ERROR"  # Number must be rejected
    WARNING = "WARNING"
    INFO = "INFO"


# ─── Finding ────────────────────────────────────────────────────────


class ChecksumFinding(BaseModel):
    """A single finding with severity, machine-readable code, and details."""

    severity: Severity
    code: str  # e.g. "CHECKSUM_MISMATCH"
    field: str  # What the finding relates to: "number", "check_digit", "table"...
    message: str
    details: dict = Field(default_factory=dict)


# ─── Report ─────────────────────────────────────────────────────────


class ChecksumReport(BaseModel):
    """Outcome of inspecting a number that should end in its Damm check digit.

    `payload`, `check_digit` and `expected_check_digit` stay None when the
    input could not be folded at all (empty or malformed).
    """

    number: str
    is_valid: bool
    payload: Optional[str] = None
    check_digit: Optional[int] = None
    expected_check_digit: Optional[int] = None
    findings: list[ChecksumFinding] = Field(default_factory=list)

    @property
    def errors(self) -> list[ChecksumFinding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

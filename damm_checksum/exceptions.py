"""
Exception hierarchy for check-digit computation.

Each exception type carries a machine-readable code so callers (and the
HTTP layer) can tell malformed input apart from a checksum that simply
does not match.
"""

from __future__ import annotations


class ChecksumError(Exception):
    """Base exception for all check-digit failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MalformedInputError(ChecksumError):
    """The input contains a character that is not one of '0'-'9'."""

    def __init__(self, number: str, position: int, character: str):
        super().__init__(
            "MALFORMED_INPUT",
            f"Character {character!r} at position {position} of {number!r} "
            f"is not a decimal digit.",
            {"position": position, "character": character},
        )
        self.number = number
        self.position = position
        self.character = character


class TableIntegrityError(ChecksumError):
    """An operation table fails the quasigroup checks the algorithm relies on."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("TABLE_INTEGRITY", message, details)

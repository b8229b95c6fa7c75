"""
Damm check-digit reduction.

Everything here is built on one fold:

    interim = 0
    for each digit d:  interim = TABLE[interim][d]

The final interim value is the check digit. Appending it and folding again
always yields 0, which is exactly what validate() tests for.

Supported:
    reduce("572")               → 4
    append_checksum("572")      → "5724"
    validate("5724")            → True
    validate("5742")            → False  (adjacent transposition)
    reduce("")                  → 0      (folding nothing is the identity)
    reduce("12a3")              → MalformedInputError
"""

from __future__ import annotations

from .exceptions import MalformedInputError
from .table import OPERATION_TABLE

# ─── Digit Lookup Table ──────────────────────────────────────────────
# Only ASCII '0'-'9'. str.isdigit() / int() would also accept '٣', '²', ...

_DIGIT_VALUES: dict[str, int] = {
    "0": 0,
    "1": 1,
    "2": 2,
    "3": 3,
    "4": 4,
    "5": 5,
    "6": 6,
    "7": 7,
    "8": 8,
    "9": 9,
}


# ─── Core Fold ───────────────────────────────────────────────────────


def reduce(number: str) -> int:
    """Fold a string of decimal digits into its interim state.

    Args:
        number: e.g. "572". The empty string is valid input.

    Returns:
        The final interim digit (0-9); 4 for "572", 0 for "".

    Raises:
        MalformedInputError: At the first character that is not '0'-'9'.
            No partial result is produced.
    """
    interim = 0
    for position, character in enumerate(number):
        value = _DIGIT_VALUES.get(character)
        if value is None:
            raise MalformedInputError(number, position, character)
        interim = OPERATION_TABLE[interim][value]
    return interim


def checksum_digit(number: str) -> int:
    """The check digit to append to `number` (same fold as reduce())."""
    return reduce(number)


def append_checksum(number: str) -> str:
    """Return `number` with its check digit appended, e.g. "572" → "5724"."""
    return f"{number}{reduce(number)}"


def validate(number: str) -> bool:
    """True iff `number` (payload + trailing check digit) folds to 0.

    Malformed input is NOT reported as False: MalformedInputError propagates
    so callers can tell "not a number" apart from "wrong check digit".
    Use is_valid() when that distinction does not matter.
    """
    return reduce(number) == 0


def is_valid(number: str) -> bool:
    """Lenient validate(): False for a checksum mismatch and for malformed input."""
    try:
        return validate(number)
    except MalformedInputError:
        return False

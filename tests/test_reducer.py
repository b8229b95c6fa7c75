"""
Test suite for the Damm reducer.

Covers the worked examples, the empty-input identity, malformed-input
rejection, and the error-detection guarantees (every single-digit
substitution and every adjacent transposition is caught).

Run: pytest tests/ -v
"""

from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor
from itertools import product

import pytest

from damm_checksum.exceptions import ChecksumError, MalformedInputError
from damm_checksum.reducer import (
    append_checksum,
    checksum_digit,
    is_valid,
    reduce,
    validate,
)

DIGITS = "0123456789"

SAMPLE_PAYLOADS = [
    "0",
    "7",
    "572",
    "1234",
    "00000",
    "99999",
    "43881234567",
    "8675309",
    "31415926535897932384626",
]


def _seeded_payloads(count: int = 200, seed: int = 2004) -> list[str]:
    rng = random.Random(seed)
    return [
        "".join(rng.choice(DIGITS) for _ in range(rng.randint(1, 24)))
        for _ in range(count)
    ]


# ═══════════════════════════════════════════════════════════════════════
# WORKED EXAMPLES
# ═══════════════════════════════════════════════════════════════════════


class TestWorkedExamples:
    def test_reduce_572(self):
        assert reduce("572") == 4

    def test_append_572(self):
        assert append_checksum("572") == "5724"

    def test_validate_5724(self):
        assert validate("5724") is True

    def test_reduce_long_number(self):
        assert reduce("43881234567") == 9

    def test_append_long_number(self):
        assert append_checksum("43881234567") == "438812345679"

    def test_validate_long_number(self):
        assert validate("438812345679") is True

    def test_corrupted_last_digit_fails(self):
        assert validate("438812345670") is False

    def test_checksum_digit_matches_reduce(self):
        for payload in SAMPLE_PAYLOADS:
            assert checksum_digit(payload) == reduce(payload)


# ═══════════════════════════════════════════════════════════════════════
# EDGE CASES
# ═══════════════════════════════════════════════════════════════════════


class TestEdgeCases:
    def test_empty_input_is_identity(self):
        assert reduce("") == 0

    def test_empty_input_does_not_raise(self):
        assert append_checksum("") == "0"
        assert validate("") is True

    def test_single_zero_validates(self):
        assert validate("0") is True

    def test_single_nonzero_digit_fails(self):
        for d in "123456789":
            assert validate(d) is False

    def test_leading_zeros_are_significant_text(self):
        """Leading zeros are kept verbatim; this is text, not an integer."""
        assert append_checksum("00572") == "00572" + str(reduce("00572"))
        assert append_checksum("00572").startswith("00572")

    def test_result_is_always_a_digit(self):
        for payload in _seeded_payloads():
            assert 0 <= reduce(payload) <= 9

    def test_input_is_not_mutated(self):
        number = "572"
        append_checksum(number)
        assert number == "572"


# ═══════════════════════════════════════════════════════════════════════
# MALFORMED INPUT
# ═══════════════════════════════════════════════════════════════════════


class TestMalformedInput:
    """Anything but '0'-'9' is an error, never a quiet False."""

    def test_letter_rejected(self):
        with pytest.raises(MalformedInputError) as exc_info:
            reduce("12a3")
        assert exc_info.value.position == 2
        assert exc_info.value.character == "a"
        assert exc_info.value.code == "MALFORMED_INPUT"
        assert exc_info.value.details == {"position": 2, "character": "a"}

    def test_first_bad_character_reported(self):
        with pytest.raises(MalformedInputError) as exc_info:
            reduce("1x2y")
        assert exc_info.value.position == 1

    @pytest.mark.parametrize(
        "number",
        [
            " 572",
            "572 ",
            "5 72",
            "-572",
            "+572",
            "5.72",
            "57\n2",
            "٥٧٢",  # Arabic-Indic digits
            "５７２",  # fullwidth digits
            "57²",  # superscript two
            "½",
        ],
    )
    def test_non_ascii_digit_forms_rejected(self, number):
        with pytest.raises(MalformedInputError):
            reduce(number)

    def test_validate_propagates_error(self):
        with pytest.raises(MalformedInputError):
            validate("57a4")

    def test_append_propagates_error(self):
        with pytest.raises(MalformedInputError):
            append_checksum("abc")

    def test_checksum_digit_propagates_error(self):
        with pytest.raises(MalformedInputError):
            checksum_digit("5-7")

    def test_error_is_a_checksum_error(self):
        with pytest.raises(ChecksumError):
            reduce("?")

    def test_is_valid_folds_malformed_into_false(self):
        assert is_valid("57a4") is False
        assert is_valid("5724") is True
        assert is_valid("5725") is False


# ═══════════════════════════════════════════════════════════════════════
# ERROR DETECTION GUARANTEES
# ═══════════════════════════════════════════════════════════════════════


class TestRoundTrip:
    @pytest.mark.parametrize("payload", SAMPLE_PAYLOADS)
    def test_sample_payloads_validate(self, payload):
        assert validate(append_checksum(payload)) is True

    def test_seeded_payloads_validate(self):
        for payload in _seeded_payloads():
            assert validate(append_checksum(payload)), payload

    def test_all_three_digit_payloads_validate(self):
        for digits in product(DIGITS, repeat=3):
            assert validate(append_checksum("".join(digits)))


class TestSingleDigitErrors:
    @staticmethod
    def _substitutions(number: str):
        for i, original in enumerate(number):
            for replacement in DIGITS:
                if replacement != original:
                    yield number[:i] + replacement + number[i + 1:]

    @pytest.mark.parametrize("payload", SAMPLE_PAYLOADS)
    def test_every_substitution_detected(self, payload):
        number = append_checksum(payload)
        for corrupted in self._substitutions(number):
            assert validate(corrupted) is False, corrupted

    def test_seeded_substitutions_detected(self):
        for payload in _seeded_payloads(count=50):
            number = append_checksum(payload)
            for corrupted in self._substitutions(number):
                assert not validate(corrupted), corrupted


class TestAdjacentTranspositions:
    @staticmethod
    def _transpositions(number: str):
        for i in range(len(number) - 1):
            a, b = number[i], number[i + 1]
            if a != b:
                yield number[:i] + b + a + number[i + 2:]

    def test_572_transposition(self):
        assert validate("5742") is False
        assert validate("7524") is False

    @pytest.mark.parametrize("payload", SAMPLE_PAYLOADS)
    def test_every_transposition_detected(self, payload):
        number = append_checksum(payload)
        for swapped in self._transpositions(number):
            assert validate(swapped) is False, swapped

    def test_all_two_digit_payload_transpositions_detected(self):
        """Includes swaps involving the check digit itself."""
        for a, b in product(DIGITS, repeat=2):
            number = append_checksum(a + b)
            for swapped in self._transpositions(number):
                assert not validate(swapped), swapped

    def test_seeded_transpositions_detected(self):
        for payload in _seeded_payloads():
            number = append_checksum(payload)
            for swapped in self._transpositions(number):
                assert not validate(swapped), swapped


# ═══════════════════════════════════════════════════════════════════════
# CONCURRENCY
# ═══════════════════════════════════════════════════════════════════════


class TestConcurrency:
    def test_parallel_calls_agree_with_serial(self):
        payloads = _seeded_payloads(count=500, seed=7)
        expected = [append_checksum(p) for p in payloads]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(append_checksum, payloads))
        assert results == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

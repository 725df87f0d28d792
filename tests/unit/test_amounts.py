"""
Tests for amount validation.

Covers:
- Rule ordering (first failing rule wins)
- Accepted decimal shapes and thousands separators
- Raising variant and input normalization
"""

import pytest

from swapform.core.swap.amounts import (
    INVALID_CHARACTERS,
    MALFORMED_NUMBER,
    NEGATIVE,
    NON_NUMERIC,
    NOT_POSITIVE,
    REQUIRED,
    TOO_LONG,
    normalize_amount_input,
    parse_amount,
    validate_amount,
)
from swapform.core.swap.errors import AmountValidationError


# =============================================================================
# Rejections
# =============================================================================

class TestAmountRejections:

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("", REQUIRED),
            ("   ", REQUIRED),
            ("1" * 25, TOO_LONG),
            ("abc", NON_NUMERIC),
            ("12e3", NON_NUMERIC),
            ("1 000", INVALID_CHARACTERS),
            ("$5", INVALID_CHARACTERS),
            ("5%", INVALID_CHARACTERS),
            ("-5", NEGATIVE),
            ("5-", NEGATIVE),
            ("5.2.5", MALFORMED_NUMBER),
            (".", MALFORMED_NUMBER),
            (",", MALFORMED_NUMBER),
            ("..5", MALFORMED_NUMBER),
            ("0", NOT_POSITIVE),
            ("0.000", NOT_POSITIVE),
            ("00,0", NOT_POSITIVE),
        ],
    )
    def test_rejection_kind(self, text, kind):
        result = validate_amount(text)
        assert result.ok is False
        assert result.value is None
        assert result.error == kind

    def test_too_long_checked_before_characters(self):
        """A long alphabetic string reports length first."""
        assert validate_amount("a" * 30).error == TOO_LONG

    def test_alphabetic_checked_before_minus(self):
        assert validate_amount("-abc").error == NON_NUMERIC

    def test_twenty_four_characters_is_allowed(self):
        result = validate_amount("1" * 24)
        assert result.ok is True

    def test_custom_max_length(self):
        assert validate_amount("12345", max_length=4).error == TOO_LONG

    def test_messages_follow_kind(self):
        assert validate_amount("").message == "Amount is required"
        assert validate_amount("0").message == "Amount must be greater than 0"
        assert validate_amount("abc").message == "Please enter a valid amount"


# =============================================================================
# Accepted values
# =============================================================================

class TestAmountAccepted:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("5", 5.0),
            ("5.25", 5.25),
            (".5", 0.5),
            ("5.", 5.0),
            ("1,234.56", 1234.56),
            ("1,000,000", 1_000_000.0),
            ("  42  ", 42.0),
        ],
    )
    def test_accepted_value(self, text, expected):
        result = validate_amount(text)
        assert result.ok is True
        assert result.error is None
        assert result.value == pytest.approx(expected)

    def test_pure_for_identical_input(self):
        assert validate_amount("1,234.56") == validate_amount("1,234.56")


# =============================================================================
# parse_amount / normalize_amount_input
# =============================================================================

class TestParseAmount:

    def test_returns_value(self):
        assert parse_amount("2.5") == pytest.approx(2.5)

    def test_raises_with_kind(self):
        with pytest.raises(AmountValidationError) as exc_info:
            parse_amount("-1")
        assert exc_info.value.kind == NEGATIVE
        assert "negative" in exc_info.value.message

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_amount("nope")


class TestNormalizeAmountInput:

    def test_strips_all_whitespace(self):
        assert normalize_amount_input(" 1 000.5 ") == "1000.5"

    def test_caps_length(self):
        assert normalize_amount_input("9" * 30) == "9" * 24

    def test_none_becomes_empty(self):
        assert normalize_amount_input(None) == ""

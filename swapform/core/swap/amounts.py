"""
Amount parsing and validation.

``validate_amount`` is pure and never raises; ``parse_amount`` is the raising
variant for callers that prefer exceptions (the HTTP layer).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import AmountValidationError

MAX_AMOUNT_INPUT_LENGTH = 24

REQUIRED = "required"
TOO_LONG = "too-long"
NON_NUMERIC = "non-numeric"
INVALID_CHARACTERS = "invalid-characters"
NEGATIVE = "negative"
MALFORMED_NUMBER = "malformed-number"
NOT_POSITIVE = "not-positive"

ERROR_MESSAGES: Dict[str, str] = {
    REQUIRED: "Amount is required",
    TOO_LONG: "Amount is too long",
    NON_NUMERIC: "Please enter a valid amount",
    INVALID_CHARACTERS: "Please enter a valid amount",
    NEGATIVE: "Amount cannot be negative",
    MALFORMED_NUMBER: "Please enter a valid amount",
    NOT_POSITIVE: "Amount must be greater than 0",
}

_ALLOWED_CHARACTERS = re.compile(r"^[0-9,.\-]+$")
_DECIMAL_SHAPE = re.compile(r"^\d*\.?\d*$")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AmountValidation:
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        return ERROR_MESSAGES.get(self.error) if self.error else None


def _reject(kind: str) -> AmountValidation:
    return AmountValidation(error=kind)


def validate_amount(text: str, max_length: int = MAX_AMOUNT_INPUT_LENGTH) -> AmountValidation:
    """Validate free-text amount input.

    Rules run in order and the first failure wins:
    required, too-long, non-numeric, invalid-characters, negative,
    malformed-number, not-positive.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return _reject(REQUIRED)
    if len(trimmed) > max_length:
        return _reject(TOO_LONG)
    if any(ch.isalpha() for ch in trimmed):
        return _reject(NON_NUMERIC)
    if not _ALLOWED_CHARACTERS.match(trimmed):
        return _reject(INVALID_CHARACTERS)
    if "-" in trimmed:
        return _reject(NEGATIVE)

    stripped = trimmed.replace(",", "")
    if not _DECIMAL_SHAPE.match(stripped) or not any(ch.isdigit() for ch in stripped):
        return _reject(MALFORMED_NUMBER)

    value = float(stripped)
    if not math.isfinite(value) or value <= 0:
        return _reject(NOT_POSITIVE)

    return AmountValidation(value=value)


def parse_amount(text: str, max_length: int = MAX_AMOUNT_INPUT_LENGTH) -> float:
    """Return the positive amount in ``text`` or raise AmountValidationError."""
    result = validate_amount(text, max_length=max_length)
    if not result.ok:
        raise AmountValidationError(result.error, result.message or "Invalid amount")
    return result.value


def normalize_amount_input(raw: str, max_length: int = MAX_AMOUNT_INPUT_LENGTH) -> str:
    """Drop whitespace and cap the length of text typed into an amount field."""
    return _WHITESPACE.sub("", raw or "")[:max_length]

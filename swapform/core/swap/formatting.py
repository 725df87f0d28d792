"""Display formatting for amounts and rates."""

from __future__ import annotations

import math

DEFAULT_AMOUNT_DIGITS = 6
DEFAULT_RATE_DIGITS = 8


def format_amount(value: float, fraction_digits: int = DEFAULT_AMOUNT_DIGITS) -> str:
    """Format with thousands separators and at most ``fraction_digits`` decimals.

    Trailing zeros are dropped, so ``1234.5`` renders as ``"1,234.5"`` and
    ``100000.0`` as ``"100,000"``. Non-finite values render as ``"0"``.
    """
    if not math.isfinite(value):
        return "0"

    text = f"{value:,.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text

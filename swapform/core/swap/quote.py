"""Quote calculation for a prospective swap between two priced tokens."""

from __future__ import annotations

import math
from typing import Optional, Union

from .amounts import MAX_AMOUNT_INPUT_LENGTH, validate_amount
from .errors import SameTokenError
from .formatting import DEFAULT_RATE_DIGITS, format_amount
from .models import Quote, Token


def _coerce_amount(amount: Union[str, float, int], max_length: int) -> Optional[float]:
    if isinstance(amount, str):
        return validate_amount(amount, max_length=max_length).value
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return float(amount)


def build_quote(
    amount: Union[str, float, int],
    from_token: Optional[Token],
    to_token: Optional[Token],
    is_send_amount: bool = True,
    *,
    max_length: int = MAX_AMOUNT_INPUT_LENGTH,
) -> Optional[Quote]:
    """Compute the exchange rate and both-sided amounts.

    Args:
        amount: raw text (validated here) or an already validated number
        from_token: token being sent
        to_token: token being received
        is_send_amount: True if ``amount`` is the send side, False for receive

    Returns:
        The quote, or None when either token is missing, both are the same
        symbol, the amount is invalid, or the rate is not finite and positive.
    """
    if from_token is None or to_token is None:
        return None
    if from_token.symbol == to_token.symbol:
        return None

    value = _coerce_amount(amount, max_length)
    if value is None:
        return None

    rate = from_token.price / to_token.price
    if not math.isfinite(rate) or rate <= 0:
        return None

    if is_send_amount:
        return Quote(rate=rate, send_amount=value, receive_amount=value * rate)
    return Quote(rate=rate, send_amount=value / rate, receive_amount=value)


def require_distinct_tokens(from_token: Token, to_token: Token) -> None:
    if from_token.symbol == to_token.symbol:
        raise SameTokenError(from_token.symbol)


def format_rate_line(
    quote: Quote,
    from_symbol: str,
    to_symbol: str,
    fraction_digits: int = DEFAULT_RATE_DIGITS,
) -> str:
    """Render ``"1 ETH = 100,000 SWTH"``."""
    return f"1 {from_symbol} = {format_amount(quote.rate, fraction_digits)} {to_symbol}"

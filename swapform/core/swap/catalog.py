"""
Token catalog normalization.

Turns the raw price records returned by the price source into a deduplicated,
symbol-sorted tuple of tokens. Malformed records are dropped silently; only a
payload that is not a list at all is treated as fatal.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .errors import CatalogParseError
from .models import Token

logger = logging.getLogger(__name__)

DEFAULT_ICON_BASE_URL = "https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens"

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9-]+$")


def normalize_symbol(raw: str) -> str:
    return raw.strip().upper()


def icon_ref_for(symbol: str, base_url: str = DEFAULT_ICON_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{symbol}.svg"


def _parse_timestamp(value: str) -> Optional[float]:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _is_valid_price(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _admit_record(record: Any) -> Optional[Tuple[str, str, float]]:
    """Return (symbol, date, price) for a well-formed record, else None."""
    if not isinstance(record, Mapping):
        return None

    currency = record.get("currency")
    date = record.get("date")
    price = record.get("price")

    if not isinstance(currency, str) or not currency.strip():
        return None
    if not isinstance(date, str):
        return None
    if not _is_valid_price(price):
        return None

    symbol = normalize_symbol(currency)
    if not _SYMBOL_PATTERN.match(symbol):
        return None

    return symbol, date, float(price)


def _is_more_recent(candidate: str, current: str) -> bool:
    candidate_ts = _parse_timestamp(candidate)
    current_ts = _parse_timestamp(current)
    if candidate_ts is None or current_ts is None:
        return False
    return candidate_ts > current_ts


def normalize_catalog(
    records: Sequence[Any],
    *,
    icon_base_url: str = DEFAULT_ICON_BASE_URL,
) -> Tuple[Token, ...]:
    """Build a token catalog from raw price records.

    Args:
        records: raw ``{currency, date, price}`` records in any order
        icon_base_url: base URL used to derive each token's icon reference

    Returns:
        Tokens sorted ascending by symbol, one per normalized symbol, each
        carrying the price of its most recent record.

    Raises:
        CatalogParseError: if ``records`` is not a list or tuple
    """
    if not isinstance(records, (list, tuple)):
        raise CatalogParseError(
            f"Unexpected prices payload: expected a list, got {type(records).__name__}"
        )

    latest_by_symbol: Dict[str, Tuple[str, float]] = {}
    rejected = 0
    superseded = 0

    for record in records:
        admitted = _admit_record(record)
        if admitted is None:
            rejected += 1
            continue

        symbol, date, price = admitted
        current = latest_by_symbol.get(symbol)
        if current is None:
            latest_by_symbol[symbol] = (date, price)
            continue

        superseded += 1
        if _is_more_recent(date, current[0]):
            latest_by_symbol[symbol] = (date, price)

    logger.debug(
        "Normalized token catalog: %d tokens, %d rejected, %d duplicates",
        len(latest_by_symbol),
        rejected,
        superseded,
    )

    return tuple(
        Token(
            symbol=symbol,
            price=price,
            updated_at=date,
            icon_ref=icon_ref_for(symbol, icon_base_url),
        )
        for symbol, (date, price) in sorted(latest_by_symbol.items())
    )


def find_token_by_symbol(catalog: Iterable[Token], symbol: str) -> Optional[Token]:
    if not symbol:
        return None
    for token in catalog:
        if token.symbol == symbol:
            return token
    return None

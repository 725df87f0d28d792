"""
Swap form synchronization.

Every user action is a pure transition ``(snapshot, event) -> snapshot``. A
transition applies its direct effect, then settles: same-symbol conflicts are
repaired from the selection history and the history is replaced by the settled
pair. Transitions never raise; problems end up as field errors on the form.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from .amounts import MAX_AMOUNT_INPUT_LENGTH, normalize_amount_input, validate_amount
from .catalog import find_token_by_symbol, normalize_symbol
from .formatting import DEFAULT_AMOUNT_DIGITS, DEFAULT_RATE_DIGITS, format_amount
from .models import (
    FORM_FIELDS,
    AmountField,
    CatalogStatus,
    FormField,
    FormValues,
    Quote,
    SelectionHistory,
    SubmitStatus,
    SwapFormSnapshot,
    SymbolField,
    Token,
)
from .quote import build_quote, format_rate_line

logger = logging.getLogger(__name__)

SYMBOL_REQUIRED_MESSAGE = "Token selection required"
SAME_TOKEN_MESSAGE = "Please choose a different receive token"
SUBMIT_SUCCESS_MESSAGE = "Swap transaction confirmed."


@dataclass(frozen=True)
class SwapFormOptions:
    preferred_from_symbol: str = "ETH"
    preferred_to_symbol: str = "SWTH"
    max_amount_input_length: int = MAX_AMOUNT_INPUT_LENGTH
    amount_fraction_digits: int = DEFAULT_AMOUNT_DIGITS
    rate_fraction_digits: int = DEFAULT_RATE_DIGITS
    search_result_limit: int = 8

    @classmethod
    def from_settings(cls, settings) -> "SwapFormOptions":
        return cls(
            preferred_from_symbol=settings.preferred_from_symbol,
            preferred_to_symbol=settings.preferred_to_symbol,
            max_amount_input_length=settings.max_amount_input_length,
            amount_fraction_digits=settings.amount_fraction_digits,
            rate_fraction_digits=settings.rate_fraction_digits,
            search_result_limit=settings.search_result_limit,
        )


DEFAULT_OPTIONS = SwapFormOptions()


# =============================================================================
# Derivation helpers
# =============================================================================


def _selected_tokens(
    snapshot: SwapFormSnapshot, values: FormValues
) -> Tuple[Optional[Token], Optional[Token]]:
    # Prices are not authoritative until the catalog has resolved.
    if snapshot.catalog_status != CatalogStatus.READY:
        return None, None
    return (
        find_token_by_symbol(snapshot.catalog, values.from_symbol),
        find_token_by_symbol(snapshot.catalog, values.to_symbol),
    )


def _linked_amount(
    amount: str,
    from_token: Optional[Token],
    to_token: Optional[Token],
    is_from_amount: bool,
    options: SwapFormOptions,
) -> str:
    quote = build_quote(
        amount,
        from_token,
        to_token,
        is_from_amount,
        max_length=options.max_amount_input_length,
    )
    if not amount or quote is None:
        return ""
    linked = quote.receive_amount if is_from_amount else quote.send_amount
    return format_amount(linked, options.amount_fraction_digits)


def _rederive_receive(
    snapshot: SwapFormSnapshot, values: FormValues, options: SwapFormOptions
) -> FormValues:
    from_token, to_token = _selected_tokens(snapshot, values)
    return replace(
        values,
        to_amount=_linked_amount(values.from_amount, from_token, to_token, True, options),
    )


def _resolve_conflict(
    values: FormValues, history: SelectionHistory, catalog: Tuple[Token, ...]
) -> FormValues:
    if not values.from_symbol or values.from_symbol != values.to_symbol:
        return values

    if values.from_symbol != history.from_symbol and history.from_symbol:
        return replace(values, to_symbol=history.from_symbol)

    if values.to_symbol != history.to_symbol and history.to_symbol:
        return replace(values, from_symbol=history.to_symbol)

    alternative = next(
        (token.symbol for token in catalog if token.symbol != values.from_symbol), None
    )
    if alternative is None:
        return values
    if values.to_symbol == history.to_symbol:
        return replace(values, to_symbol=alternative)
    return replace(values, from_symbol=alternative)


def _settle(
    snapshot: SwapFormSnapshot, values: FormValues, options: SwapFormOptions
) -> SwapFormSnapshot:
    resolved = _resolve_conflict(values, snapshot.history, snapshot.catalog)
    if resolved != values:
        logger.debug(
            "Resolved same-token selection %s -> %s/%s",
            values.from_symbol,
            resolved.from_symbol,
            resolved.to_symbol,
        )
        resolved = _rederive_receive(snapshot, resolved, options)

    return replace(snapshot, values=resolved, history=SelectionHistory.of(resolved))


def _clear_submit_message(snapshot: SwapFormSnapshot) -> SwapFormSnapshot:
    if snapshot.submit_status in (SubmitStatus.SUCCEEDED, SubmitStatus.FAILED):
        return replace(snapshot, submit_status=SubmitStatus.IDLE, submit_message=None)
    return snapshot


# =============================================================================
# Transitions
# =============================================================================


def apply_amount_input(
    snapshot: SwapFormSnapshot,
    field: AmountField,
    raw_value: str,
    options: SwapFormOptions = DEFAULT_OPTIONS,
) -> SwapFormSnapshot:
    """Set an amount field and re-derive the opposite one."""
    if field not in ("from_amount", "to_amount"):
        return snapshot

    text = normalize_amount_input(raw_value, options.max_amount_input_length)
    values = snapshot.values
    from_token, to_token = _selected_tokens(snapshot, values)

    if field == "from_amount":
        values = replace(
            values,
            from_amount=text,
            to_amount=_linked_amount(text, from_token, to_token, True, options),
        )
    else:
        values = replace(
            values,
            to_amount=text,
            from_amount=_linked_amount(text, from_token, to_token, False, options),
        )

    return _settle(_clear_submit_message(snapshot), values, options)


def apply_symbol_change(
    snapshot: SwapFormSnapshot,
    field: SymbolField,
    symbol: str,
    options: SwapFormOptions = DEFAULT_OPTIONS,
) -> SwapFormSnapshot:
    """Select a token on one side; the receive amount follows the send amount."""
    if field not in ("from_symbol", "to_symbol"):
        return snapshot

    values = replace(snapshot.values, **{field: normalize_symbol(symbol or "")})
    values = _rederive_receive(snapshot, values, options)
    return _settle(_clear_submit_message(snapshot), values, options)


def apply_direction_swap(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> SwapFormSnapshot:
    """Exchange both symbols and both amounts in one step."""
    current = snapshot.values
    values = FormValues(
        from_amount=current.to_amount,
        to_amount=current.from_amount,
        from_symbol=current.to_symbol,
        to_symbol=current.from_symbol,
    )
    snapshot = replace(_clear_submit_message(snapshot), touched=frozenset(FORM_FIELDS))
    return _settle(snapshot, values, options)


def apply_initial_selection(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> SwapFormSnapshot:
    """Pick the default pair once the catalog is loaded and nothing is selected."""
    catalog = snapshot.catalog
    values = snapshot.values
    if snapshot.catalog_status != CatalogStatus.READY or not catalog:
        return snapshot
    if values.from_symbol or values.to_symbol:
        return snapshot

    from_token = find_token_by_symbol(catalog, options.preferred_from_symbol) or catalog[0]
    to_token = find_token_by_symbol(catalog, options.preferred_to_symbol)
    if to_token is None or to_token.symbol == from_token.symbol:
        to_token = next(
            (token for token in catalog if token.symbol != from_token.symbol), from_token
        )

    values = replace(values, from_symbol=from_token.symbol, to_symbol=to_token.symbol)
    values = _rederive_receive(snapshot, values, options)
    return replace(snapshot, values=values, history=SelectionHistory.of(values))


def apply_catalog_loaded(
    snapshot: SwapFormSnapshot,
    catalog: Tuple[Token, ...],
    options: SwapFormOptions = DEFAULT_OPTIONS,
) -> SwapFormSnapshot:
    snapshot = replace(
        snapshot,
        catalog=tuple(catalog),
        catalog_status=CatalogStatus.READY,
        catalog_error=None,
    )
    if snapshot.values.from_symbol or snapshot.values.to_symbol:
        values = _rederive_receive(snapshot, snapshot.values, options)
        return _settle(snapshot, values, options)
    return apply_initial_selection(snapshot, options)


def apply_catalog_failed(snapshot: SwapFormSnapshot, message: str) -> SwapFormSnapshot:
    return replace(
        snapshot,
        catalog=(),
        catalog_status=CatalogStatus.ERROR,
        catalog_error=message or "Failed to load prices",
    )


def mark_touched(snapshot: SwapFormSnapshot, field: FormField) -> SwapFormSnapshot:
    if field not in FORM_FIELDS or field in snapshot.touched:
        return snapshot
    return replace(snapshot, touched=snapshot.touched | {field})


# =============================================================================
# Derived views
# =============================================================================


def form_errors(
    values: FormValues, options: SwapFormOptions = DEFAULT_OPTIONS
) -> Dict[str, str]:
    """First error message per field, keyed by field name."""
    errors: Dict[str, str] = {}

    for field in ("from_amount", "to_amount"):
        result = validate_amount(getattr(values, field), options.max_amount_input_length)
        if not result.ok:
            errors[field] = result.message

    for field in ("from_symbol", "to_symbol"):
        if not getattr(values, field):
            errors[field] = SYMBOL_REQUIRED_MESSAGE

    if values.from_symbol and values.from_symbol == values.to_symbol:
        errors.setdefault("to_symbol", SAME_TOKEN_MESSAGE)

    return errors


def visible_errors(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> Dict[str, str]:
    errors = form_errors(snapshot.values, options)
    if snapshot.attempted_submit:
        return errors
    return {field: message for field, message in errors.items() if field in snapshot.touched}


def current_quote(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> Optional[Quote]:
    from_token, to_token = _selected_tokens(snapshot, snapshot.values)
    return build_quote(
        snapshot.values.from_amount,
        from_token,
        to_token,
        True,
        max_length=options.max_amount_input_length,
    )


def rate_line(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> str:
    quote = current_quote(snapshot, options)
    if quote is None:
        return ""
    return format_rate_line(
        quote,
        snapshot.values.from_symbol,
        snapshot.values.to_symbol,
        options.rate_fraction_digits,
    )


def can_submit(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> bool:
    return (
        snapshot.catalog_status == CatalogStatus.READY
        and snapshot.catalog_error is None
        and not snapshot.is_submitting
        and not form_errors(snapshot.values, options)
        and current_quote(snapshot, options) is not None
    )


# =============================================================================
# Submission
# =============================================================================


def begin_submit(
    snapshot: SwapFormSnapshot, options: SwapFormOptions = DEFAULT_OPTIONS
) -> SwapFormSnapshot:
    """Enter the in-flight state if the form may be submitted.

    A submit while another one is in flight leaves the snapshot untouched.
    Otherwise the attempt is recorded so every field error becomes visible.
    """
    if snapshot.is_submitting:
        return snapshot

    snapshot = replace(snapshot, attempted_submit=True)
    if not can_submit(snapshot, options):
        return snapshot

    return replace(snapshot, submit_status=SubmitStatus.IN_FLIGHT, submit_message=None)


def settle_submit(
    snapshot: SwapFormSnapshot, error: Optional[str] = None
) -> SwapFormSnapshot:
    if not snapshot.is_submitting:
        return snapshot
    if error is not None:
        return replace(snapshot, submit_status=SubmitStatus.FAILED, submit_message=error)
    return replace(
        snapshot, submit_status=SubmitStatus.SUCCEEDED, submit_message=SUBMIT_SUCCESS_MESSAGE
    )

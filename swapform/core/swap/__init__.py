"""
Swap form core

Catalog normalization, amount validation, quote calculation, token search and
the form synchronizer that ties them together.
"""

from .amounts import AmountValidation, normalize_amount_input, parse_amount, validate_amount
from .catalog import find_token_by_symbol, icon_ref_for, normalize_catalog, normalize_symbol
from .errors import (
    AmountValidationError,
    CatalogFetchError,
    CatalogParseError,
    SameTokenError,
    SubmissionError,
    SwapFormError,
)
from .formatting import format_amount
from .models import (
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
from .quote import build_quote, format_rate_line, require_distinct_tokens
from .search import (
    TokenSearchState,
    ensure_selected_token_included,
    filter_tokens_by_search,
    iter_matching_tokens,
    search_tokens,
)
from .session import SwapFormSession
from .submission import SimulatedSwapExecutor, SwapExecutor, SwapOrder, SwapReceipt
from .synchronizer import (
    SwapFormOptions,
    apply_amount_input,
    apply_catalog_failed,
    apply_catalog_loaded,
    apply_direction_swap,
    apply_initial_selection,
    apply_symbol_change,
    begin_submit,
    can_submit,
    current_quote,
    form_errors,
    mark_touched,
    settle_submit,
    visible_errors,
)

__all__ = [
    # Catalog
    "normalize_catalog",
    "normalize_symbol",
    "icon_ref_for",
    "find_token_by_symbol",
    # Amounts
    "AmountValidation",
    "validate_amount",
    "parse_amount",
    "normalize_amount_input",
    "format_amount",
    # Quotes
    "build_quote",
    "format_rate_line",
    "require_distinct_tokens",
    # Models
    "Token",
    "Quote",
    "FormValues",
    "SelectionHistory",
    "SwapFormSnapshot",
    "CatalogStatus",
    "SubmitStatus",
    "AmountField",
    "SymbolField",
    "FormField",
    # Search
    "TokenSearchState",
    "iter_matching_tokens",
    "filter_tokens_by_search",
    "search_tokens",
    "ensure_selected_token_included",
    # Synchronizer
    "SwapFormOptions",
    "apply_amount_input",
    "apply_symbol_change",
    "apply_direction_swap",
    "apply_initial_selection",
    "apply_catalog_loaded",
    "apply_catalog_failed",
    "mark_touched",
    "form_errors",
    "visible_errors",
    "current_quote",
    "can_submit",
    "begin_submit",
    "settle_submit",
    # Session & submission
    "SwapFormSession",
    "SwapExecutor",
    "SimulatedSwapExecutor",
    "SwapOrder",
    "SwapReceipt",
    # Errors
    "SwapFormError",
    "CatalogFetchError",
    "CatalogParseError",
    "AmountValidationError",
    "SameTokenError",
    "SubmissionError",
]

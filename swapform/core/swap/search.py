"""
Quick token search.

The filter is a plain substring match over the catalog. ``TokenSearchState``
adds the keyboard layer: a query, whether the result list is open, and which
result is highlighted.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .catalog import find_token_by_symbol
from .models import Token

DEFAULT_RESULT_LIMIT = 8


def iter_matching_tokens(catalog: Iterable[Token], query: str) -> Iterator[Token]:
    needle = (query or "").strip().lower()
    for token in catalog:
        if not needle or needle in token.symbol.lower():
            yield token


def filter_tokens_by_search(catalog: Iterable[Token], query: str) -> List[Token]:
    """All tokens whose symbol contains ``query``; a blank query keeps every token."""
    return list(iter_matching_tokens(catalog, query))


def search_tokens(
    catalog: Iterable[Token], query: str, limit: int = DEFAULT_RESULT_LIMIT
) -> List[Token]:
    """Quick-search results for display. A blank query has no results."""
    if not (query or "").strip():
        return []
    return list(islice(iter_matching_tokens(catalog, query), limit))


def ensure_selected_token_included(
    catalog: Sequence[Token], filtered: List[Token], selected_symbol: str
) -> List[Token]:
    """Keep the currently selected token visible in a filtered option list."""
    if not selected_symbol or any(token.symbol == selected_symbol for token in filtered):
        return filtered
    selected = find_token_by_symbol(catalog, selected_symbol)
    return [selected, *filtered] if selected else filtered


@dataclass(frozen=True)
class TokenSearchState:
    query: str = ""
    is_open: bool = False
    highlighted_index: int = -1


def update_query(state: TokenSearchState, query: str) -> TokenSearchState:
    next_query = (query or "").upper()
    return TokenSearchState(query=next_query, is_open=bool(next_query), highlighted_index=0)


def move_highlight(state: TokenSearchState, delta: int, result_count: int) -> TokenSearchState:
    """Move the highlighted result, clamped to ``[0, result_count - 1]``."""
    if not state.is_open or result_count <= 0 or delta == 0:
        return state

    current = state.highlighted_index
    if delta > 0:
        index = 0 if current < 0 else min(current + delta, result_count - 1)
    else:
        index = 0 if current <= 0 else max(current + delta, 0)

    return TokenSearchState(query=state.query, is_open=True, highlighted_index=index)


def confirm_selection(
    state: TokenSearchState, results: Sequence[Token]
) -> Tuple[TokenSearchState, Optional[str]]:
    """Return the cleared state and the chosen symbol, if any."""
    if not state.is_open or not state.query.strip() or not results:
        return state, None
    index = min(max(state.highlighted_index, 0), len(results) - 1)
    return TokenSearchState(), results[index].symbol


def cancel_search(state: TokenSearchState) -> TokenSearchState:
    return TokenSearchState()

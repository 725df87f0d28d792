"""Stateful swap form session built on the pure synchronizer transitions."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from . import search as token_search
from . import synchronizer as sync
from .errors import SubmissionError
from .models import AmountField, FormField, FormValues, Quote, SwapFormSnapshot, SymbolField, Token
from .search import TokenSearchState
from .submission import SimulatedSwapExecutor, SwapExecutor, SwapOrder

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "Swap submission failed"


class SwapFormSession:
    """One mounted swap form.

    Holds the current snapshot and quick-search state, dispatches user actions
    to the synchronizer, and runs the asynchronous catalog load and submission.
    User actions are processed one at a time in arrival order.
    """

    def __init__(
        self,
        options: Optional[sync.SwapFormOptions] = None,
        executor: Optional[SwapExecutor] = None,
        loader=None,
    ):
        self.options = options or sync.DEFAULT_OPTIONS
        self.executor = executor or SimulatedSwapExecutor()
        self.loader = loader
        self._snapshot = SwapFormSnapshot()
        self._search = TokenSearchState()

    @classmethod
    def from_settings(cls, settings, loader=None) -> "SwapFormSession":
        return cls(
            options=sync.SwapFormOptions.from_settings(settings),
            executor=SimulatedSwapExecutor(delay_seconds=settings.submit_delay_seconds),
            loader=loader,
        )

    # -- state -----------------------------------------------------------------

    @property
    def snapshot(self) -> SwapFormSnapshot:
        return self._snapshot

    @property
    def values(self) -> FormValues:
        return self._snapshot.values

    @property
    def quote(self) -> Optional[Quote]:
        return sync.current_quote(self._snapshot, self.options)

    @property
    def rate_line(self) -> str:
        return sync.rate_line(self._snapshot, self.options)

    @property
    def errors(self) -> Dict[str, str]:
        return sync.form_errors(self._snapshot.values, self.options)

    @property
    def visible_errors(self) -> Dict[str, str]:
        return sync.visible_errors(self._snapshot, self.options)

    @property
    def can_submit(self) -> bool:
        return sync.can_submit(self._snapshot, self.options)

    # -- catalog ---------------------------------------------------------------

    async def load_catalog(self) -> SwapFormSnapshot:
        if self.loader is None:
            raise RuntimeError("SwapFormSession has no catalog loader")

        result = await self.loader.load()
        if result is None:
            return self._snapshot
        if result.ok:
            return self.set_catalog(result.tokens)
        self._snapshot = sync.apply_catalog_failed(self._snapshot, result.error)
        return self._snapshot

    def set_catalog(self, tokens: Sequence[Token]) -> SwapFormSnapshot:
        self._snapshot = sync.apply_catalog_loaded(self._snapshot, tuple(tokens), self.options)
        return self._snapshot

    # -- form actions ----------------------------------------------------------

    def edit_amount(self, field: AmountField, raw_value: str) -> SwapFormSnapshot:
        self._snapshot = sync.apply_amount_input(self._snapshot, field, raw_value, self.options)
        return self._snapshot

    def edit_from_amount(self, raw_value: str) -> SwapFormSnapshot:
        return self.edit_amount("from_amount", raw_value)

    def edit_to_amount(self, raw_value: str) -> SwapFormSnapshot:
        return self.edit_amount("to_amount", raw_value)

    def select_symbol(self, field: SymbolField, symbol: str) -> SwapFormSnapshot:
        self._snapshot = sync.apply_symbol_change(self._snapshot, field, symbol, self.options)
        return self._snapshot

    def select_from_symbol(self, symbol: str) -> SwapFormSnapshot:
        return self.select_symbol("from_symbol", symbol)

    def select_to_symbol(self, symbol: str) -> SwapFormSnapshot:
        return self.select_symbol("to_symbol", symbol)

    def swap_direction(self) -> SwapFormSnapshot:
        self._snapshot = sync.apply_direction_swap(self._snapshot, self.options)
        return self._snapshot

    def touch(self, field: FormField) -> SwapFormSnapshot:
        self._snapshot = sync.mark_touched(self._snapshot, field)
        return self._snapshot

    # -- quick search ----------------------------------------------------------

    @property
    def search_state(self) -> TokenSearchState:
        return self._search

    @property
    def search_results(self) -> List[Token]:
        return token_search.search_tokens(
            self._snapshot.catalog, self._search.query, self.options.search_result_limit
        )

    def update_search(self, query: str) -> TokenSearchState:
        self._search = token_search.update_query(self._search, query)
        return self._search

    def move_search_highlight(self, delta: int) -> TokenSearchState:
        self._search = token_search.move_highlight(self._search, delta, len(self.search_results))
        return self._search

    def confirm_search(self) -> Optional[str]:
        """Apply the highlighted result as the send token."""
        self._search, symbol = token_search.confirm_selection(self._search, self.search_results)
        if symbol is not None:
            self.touch("from_symbol")
            self.select_from_symbol(symbol)
        return symbol

    def cancel_search(self) -> TokenSearchState:
        self._search = token_search.cancel_search(self._search)
        return self._search

    # -- submission ------------------------------------------------------------

    async def submit(self) -> SwapFormSnapshot:
        """Submit the current swap.

        Rejected as a no-op while another submission is in flight.
        """
        if self._snapshot.is_submitting:
            logger.debug("Submit ignored: a submission is already in flight")
            return self._snapshot

        self._snapshot = sync.begin_submit(self._snapshot, self.options)
        if not self._snapshot.is_submitting:
            return self._snapshot

        quote = self.quote
        order = SwapOrder(
            from_symbol=self.values.from_symbol,
            to_symbol=self.values.to_symbol,
            send_amount=quote.send_amount,
            receive_amount=quote.receive_amount,
            rate=quote.rate,
        )

        error: Optional[str] = SUBMIT_FAILED_MESSAGE
        try:
            await self.executor.execute(order)
            error = None
        except SubmissionError as exc:
            logger.warning("Swap submission failed: %s", exc)
            error = str(exc) or SUBMIT_FAILED_MESSAGE
        except Exception:
            logger.exception("Swap executor %s failed unexpectedly", type(self.executor).__name__)
        finally:
            # Also runs on cancellation; the task still re-raises afterwards
            self._snapshot = sync.settle_submit(self._snapshot, error)
        return self._snapshot

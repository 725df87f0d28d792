"""Typed models used by the swap form engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Literal, Optional, Tuple


AmountField = Literal["from_amount", "to_amount"]
SymbolField = Literal["from_symbol", "to_symbol"]
FormField = Literal["from_amount", "to_amount", "from_symbol", "to_symbol"]

FORM_FIELDS: Tuple[str, ...] = ("from_amount", "to_amount", "from_symbol", "to_symbol")


class CatalogStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SubmitStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Token:
    """A tradable currency with its latest known price."""

    symbol: str
    price: float
    updated_at: str
    icon_ref: str


@dataclass(frozen=True)
class Quote:
    """Exchange rate and both-sided amounts for a prospective swap."""

    rate: float
    send_amount: float
    receive_amount: float


@dataclass(frozen=True)
class FormValues:
    from_amount: str = ""
    to_amount: str = ""
    from_symbol: str = ""
    to_symbol: str = ""


@dataclass(frozen=True)
class SelectionHistory:
    """The previously settled symbol pair."""

    from_symbol: str = ""
    to_symbol: str = ""

    @classmethod
    def of(cls, values: FormValues) -> "SelectionHistory":
        return cls(from_symbol=values.from_symbol, to_symbol=values.to_symbol)


@dataclass(frozen=True)
class SwapFormSnapshot:
    """Complete state of one swap form, threaded through every transition."""

    values: FormValues = field(default_factory=FormValues)
    history: SelectionHistory = field(default_factory=SelectionHistory)
    catalog: Tuple[Token, ...] = ()
    catalog_status: CatalogStatus = CatalogStatus.LOADING
    catalog_error: Optional[str] = None
    touched: FrozenSet[str] = frozenset()
    attempted_submit: bool = False
    submit_status: SubmitStatus = SubmitStatus.IDLE
    submit_message: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.catalog_status == CatalogStatus.LOADING

    @property
    def is_submitting(self) -> bool:
        return self.submit_status == SubmitStatus.IN_FLIGHT

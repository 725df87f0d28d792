"""Exception types raised by the swap form engine and its adapters."""

from __future__ import annotations


class SwapFormError(Exception):
    """Base class for swap form errors."""


class CatalogFetchError(SwapFormError):
    """The price source could not be reached or answered with an error status."""


class CatalogParseError(SwapFormError):
    """The price payload as a whole is not a list of records."""


class AmountValidationError(SwapFormError, ValueError):
    """Amount text was rejected by the validator."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class SameTokenError(SwapFormError):
    """Both sides of a swap resolve to the same token."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Cannot swap {symbol} for itself")
        self.symbol = symbol


class SubmissionError(SwapFormError):
    """A swap submission was attempted but did not settle."""

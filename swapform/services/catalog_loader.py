"""
Catalog loading with one outstanding fetch.

Starting a new load cancels the previous in-flight fetch. The caller whose load
was superseded gets ``None`` back instead of a result, so a stale catalog can
never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import settings
from ..core.swap.catalog import normalize_catalog
from ..core.swap.errors import CatalogFetchError, CatalogParseError
from ..core.swap.models import Token
from ..providers.base import PriceProvider
from ..providers.prices import PricesProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogLoadResult:
    tokens: Tuple[Token, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogLoader:
    def __init__(
        self,
        provider: Optional[PriceProvider] = None,
        icon_base_url: Optional[str] = None,
    ) -> None:
        self.provider = provider or PricesProvider()
        self.icon_base_url = icon_base_url or settings.token_icon_base_url
        self._task: Optional[asyncio.Task] = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fetch(self) -> CatalogLoadResult:
        try:
            payload = await self.provider.get_price_records()
            tokens = normalize_catalog(payload, icon_base_url=self.icon_base_url)
        except (CatalogFetchError, CatalogParseError) as exc:
            logger.warning("Catalog load failed: %s", exc)
            return CatalogLoadResult(error=str(exc))
        return CatalogLoadResult(tokens=tokens)

    async def load(self) -> Optional[CatalogLoadResult]:
        """Fetch and normalize the catalog.

        Returns:
            The load result, or None if a newer load superseded this one.
        """
        if self.in_flight:
            logger.debug("Cancelling superseded catalog load")
            self._task.cancel()

        task = asyncio.ensure_future(self._fetch())
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._task is not task:
                return None
            raise
        finally:
            if self._task is task and task.done():
                self._task = None

    def cancel(self) -> None:
        if self.in_flight:
            self._task.cancel()
        self._task = None


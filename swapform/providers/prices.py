import logging
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from ..core.swap.errors import CatalogFetchError
from .base import PriceProvider

logger = logging.getLogger(__name__)


class PricesProvider(PriceProvider):
    """Fetches the public price list as a JSON array of records"""

    name = "prices"

    def __init__(
        self,
        url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.prices_url
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    async def ready(self) -> bool:
        return settings.has_prices_source and bool(self.url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }

        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def get_price_records(self) -> Any:
        """Single best-effort GET of the price list"""
        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Price source answered %s", exc.response.status_code)
            raise CatalogFetchError("Failed to fetch token prices") from exc
        except httpx.HTTPError as exc:
            logger.warning("Price source request failed: %s", exc)
            raise CatalogFetchError("Failed to fetch token prices") from exc
        except ValueError as exc:
            logger.warning("Price source returned invalid JSON")
            raise CatalogFetchError("Unexpected prices response") from exc


_provider: Optional[PricesProvider] = None


def get_price_provider() -> PricesProvider:
    global _provider
    if _provider is None:
        _provider = PricesProvider()
    return _provider

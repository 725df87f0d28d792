"""
Tests for the price source provider.
"""

import json

import httpx
import pytest

from swapform.config import settings
from swapform.core.swap.errors import CatalogFetchError
from swapform.providers.prices import PricesProvider

URL = "https://prices.test/prices.json"

PAYLOAD = [
    {"currency": "ETH", "date": "2023-08-29T07:10:52.000Z", "price": 1645.93},
    {"currency": "SWTH", "date": "2023-08-29T07:10:40.000Z", "price": 0.004},
]


def provider_for(handler):
    return PricesProvider(url=URL, timeout_s=5, transport=httpx.MockTransport(handler))


class TestGetPriceRecords:

    @pytest.mark.asyncio
    async def test_returns_decoded_payload(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=PAYLOAD)

        records = await provider_for(handler).get_price_records()

        assert records == PAYLOAD
        assert len(requests) == 1
        assert str(requests[0].url) == URL

    @pytest.mark.asyncio
    async def test_non_list_payload_passed_through(self):
        records = await provider_for(lambda r: httpx.Response(200, json={"error": "nope"})).get_price_records()
        assert records == {"error": "nope"}

    @pytest.mark.asyncio
    async def test_error_status_raises_fetch_error(self):
        provider = provider_for(lambda r: httpx.Response(503, text="down"))
        with pytest.raises(CatalogFetchError, match="Failed to fetch token prices"):
            await provider.get_price_records()

    @pytest.mark.asyncio
    async def test_transport_error_raises_fetch_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(CatalogFetchError):
            await provider_for(handler).get_price_records()

    @pytest.mark.asyncio
    async def test_invalid_json_raises_fetch_error(self):
        provider = provider_for(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(CatalogFetchError, match="Unexpected prices response"):
            await provider.get_price_records()


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_healthy(self):
        async def body():
            yield json.dumps(PAYLOAD).encode()

        # Streamed so the client reads and closes the body, which sets elapsed
        status = await provider_for(lambda r: httpx.Response(200, content=body())).health_check()
        assert status["status"] == "healthy"
        assert status["latency_ms"] >= 0

    @pytest.mark.asyncio
    async def test_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "enable_prices", False)
        provider = provider_for(lambda r: httpx.Response(200, json=PAYLOAD))
        assert await provider.ready() is False
        status = await provider.health_check()
        assert status["status"] == "unavailable"

    @pytest.mark.asyncio
    async def test_error(self):
        status = await provider_for(lambda r: httpx.Response(500)).health_check()
        assert status["status"] == "error"

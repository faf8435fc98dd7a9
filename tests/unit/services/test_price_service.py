"""Unit tests for PriceService.

Tests cover:
- Cache hit, miss and write-back
- Fallback snapshot on provider failures
- Operation without a cache
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import orjson
import pytest
import respx

from oilinfo.clients.bangchak.client import BangchakClient
from oilinfo.clients.exceptions import SchemaError, UpstreamError
from oilinfo.services.prices.constants import CURRENT_PRICES_CACHE_KEY, FALLBACK_QUOTES
from oilinfo.services.prices.service import PriceService, fallback_prices


if TYPE_CHECKING:
    from oilinfo.cache.store import CacheStore
    from tests.conftest import FakeClock


pytestmark = pytest.mark.unit


@pytest.fixture
def mock_client(provider_payload: dict[str, Any]) -> MagicMock:
    """Provider client returning the sample payload."""
    client = MagicMock()
    client.fetch_current_prices = AsyncMock(return_value=provider_payload)
    return client


@pytest.fixture
def service(store: CacheStore, mock_client: MagicMock, clock: FakeClock) -> PriceService:
    """PriceService over the in-memory cache."""
    return PriceService(store=store, client=mock_client, clock=clock)


class TestFallbackPrices:
    """Tests for the fallback snapshot."""

    def test_matches_fixed_quotes(self, clock: FakeClock) -> None:
        """Should carry the fixed fallback prices."""
        prices = fallback_prices(clock.now)

        assert prices.gasoline95.price == 38.42
        assert prices.gasoline95.change == -0.20
        assert prices.e85.price == 28.90
        assert prices.diesel_b20.change == -0.22
        assert prices.updated_at == clock.now.isoformat()

    def test_covers_every_grade(self) -> None:
        """Should define a quote for every grade."""
        assert len(FALLBACK_QUOTES) == 8


class TestGetCurrentPrices:
    """Tests for get_current_prices."""

    async def test_fetches_and_caches_on_miss(
        self,
        service: PriceService,
        mock_client: MagicMock,
        mock_redis: MagicMock,
    ) -> None:
        """Should fetch, transform and write the result to the cache."""
        prices = await service.get_current_prices()

        assert prices.gasoline95.price == 45.84
        mock_client.fetch_current_prices.assert_awaited_once()
        doc = orjson.loads(mock_redis.storage[f"oilinfo:{CURRENT_PRICES_CACHE_KEY}"])
        assert doc["data"]["dieselB7"] == {"price": 32.94, "change": -0.5}
        assert doc["ttl"] == 3600

    async def test_serves_cache_hit_without_fetching(
        self,
        service: PriceService,
        mock_client: MagicMock,
    ) -> None:
        """Should not call the provider while the cached copy is fresh."""
        first = await service.get_current_prices()
        second = await service.get_current_prices()

        assert second == first
        mock_client.fetch_current_prices.assert_awaited_once()

    async def test_refetches_after_expiry(
        self,
        service: PriceService,
        mock_client: MagicMock,
        clock: FakeClock,
    ) -> None:
        """Should fetch again once the cached copy is an hour old."""
        await service.get_current_prices()
        clock.advance(3600)
        await service.get_current_prices()

        assert mock_client.fetch_current_prices.await_count == 2

    @pytest.mark.parametrize(
        "error",
        [
            UpstreamError("bangchak", "HTTP 503", status_code=503),
            SchemaError("Invalid JSON"),
        ],
    )
    async def test_provider_failure_serves_fallback(
        self,
        service: PriceService,
        mock_client: MagicMock,
        mock_redis: MagicMock,
        clock: FakeClock,
        error: Exception,
    ) -> None:
        """Should return the fallback snapshot and not cache it."""
        mock_client.fetch_current_prices = AsyncMock(side_effect=error)

        prices, is_fallback = await service.get_current_prices_with_source()

        assert is_fallback is True
        assert prices == fallback_prices(clock.now)
        mock_redis.setex.assert_not_called()

    async def test_malformed_payload_serves_fallback(
        self,
        service: PriceService,
        mock_client: MagicMock,
    ) -> None:
        """Should fall back when the payload has no Data list."""
        mock_client.fetch_current_prices = AsyncMock(return_value={"error": "maintenance"})

        prices = await service.get_current_prices()

        assert prices.gasoline95.price == 38.42

    async def test_live_prices_not_flagged_as_fallback(self, service: PriceService) -> None:
        """Should report live prices as not the fallback."""
        _, is_fallback = await service.get_current_prices_with_source()

        assert is_fallback is False

    async def test_works_without_cache(
        self,
        unavailable_store: CacheStore,
        mock_client: MagicMock,
    ) -> None:
        """Should still fetch and return prices when the cache is down."""
        service = PriceService(store=unavailable_store, client=mock_client)

        prices = await service.get_current_prices()

        assert prices.gasoline95.price == 45.84

    async def test_discards_malformed_cached_copy(
        self,
        service: PriceService,
        mock_client: MagicMock,
        store: CacheStore,
    ) -> None:
        """Should refetch when the cached payload no longer validates."""
        await store.put(CURRENT_PRICES_CACHE_KEY, {"gasoline95": "oops"}, 3600)

        prices = await service.get_current_prices()

        assert prices.gasoline95.price == 45.84
        mock_client.fetch_current_prices.assert_awaited_once()

    async def test_unexpected_errors_propagate(
        self,
        service: PriceService,
        mock_client: MagicMock,
    ) -> None:
        """Should let errors other than provider failures reach the caller."""
        mock_client.fetch_current_prices = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            await service.get_current_prices()


class TestProviderRedirect:
    """Tests for a provider endpoint that has moved."""

    @respx.mock
    async def test_redirect_serves_live_prices(
        self,
        unavailable_store: CacheStore,
        provider_payload: dict[str, Any],
    ) -> None:
        """Should return the provider's prices, not the fallback, after a 301."""
        url = "https://oil-price.bangchak.co.th/ApiOilPrice2"
        moved = "https://oil-price.bangchak.co.th/v2/ApiOilPrice2"
        respx.get(url).mock(return_value=httpx.Response(301, headers={"Location": moved}))
        respx.get(moved).mock(return_value=httpx.Response(200, json=provider_payload))
        client = BangchakClient(url=url)
        await client.initialize()
        service = PriceService(store=unavailable_store, client=client)

        try:
            prices, is_fallback = await service.get_current_prices_with_source()
        finally:
            await client.shutdown()

        assert is_fallback is False
        assert prices.gasoline95.price == 45.84

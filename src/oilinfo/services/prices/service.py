"""Current fuel-price service.

Lookup order: Cache -> Provider -> Fallback snapshot.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import ValidationError

from oilinfo.clients.exceptions import SchemaError, UpstreamError
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import CurrentPrices, PriceQuote
from oilinfo.services.prices.constants import (
    CURRENT_PRICES_CACHE_KEY,
    CURRENT_PRICES_CACHE_TTL_SECONDS,
    FALLBACK_QUOTES,
)
from oilinfo.services.prices.transformer import transform_provider_payload


if TYPE_CHECKING:
    from collections.abc import Callable

    from oilinfo.cache.store import CacheStore
    from oilinfo.clients.bangchak.client import BangchakClient

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def fallback_prices(now: datetime | None = None) -> CurrentPrices:
    """Build the fixed fallback snapshot, stamped with ``now``."""
    quotes = {
        grade: PriceQuote(price=price, change=change)
        for grade, (price, change) in FALLBACK_QUOTES.items()
    }
    return CurrentPrices(**quotes, updated_at=(now or _utcnow()).isoformat())


class PriceService:
    """Service for the current retail price snapshot."""

    def __init__(
        self,
        store: CacheStore,
        client: BangchakClient,
        ttl_seconds: int = CURRENT_PRICES_CACHE_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the price service.

        Args:
            store: Cache store shared by all services.
            client: Fuel-price provider client.
            ttl_seconds: Cache lifetime of a fetched snapshot.
            clock: Source of the current time.
        """
        self._store = store
        self._client = client
        self._ttl = ttl_seconds
        self._clock = clock

    async def get_current_prices(self) -> CurrentPrices:
        """Get the current prices, never failing on provider errors."""
        prices, _ = await self.get_current_prices_with_source()
        return prices

    async def get_current_prices_with_source(self) -> tuple[CurrentPrices, bool]:
        """Get the current prices and whether they are the fallback snapshot.

        Derived views use the flag to avoid caching values built on the
        fallback.
        """
        cached = await self._get_from_cache()
        if cached is not None:
            logger.debug("Cache hit for current prices")
            return cached, False

        try:
            payload = await self._client.fetch_current_prices()
            prices = transform_provider_payload(payload, now=self._clock())
        except (UpstreamError, SchemaError) as e:
            logger.warning(
                "Price provider unavailable, serving fallback",
                error=str(e),
                error_type=type(e).__name__,
            )
            return fallback_prices(self._clock()), True

        await self._store.put(
            CURRENT_PRICES_CACHE_KEY,
            prices.model_dump(mode="json"),
            self._ttl,
        )
        return prices, False

    async def _get_from_cache(self) -> CurrentPrices | None:
        payload = await self._store.get(CURRENT_PRICES_CACHE_KEY, self._ttl)
        if payload is None:
            return None
        try:
            return CurrentPrices.model_validate(payload)
        except ValidationError:
            logger.warning("Discarding malformed cached prices")
            return None

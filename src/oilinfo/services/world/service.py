"""World crude-price service.

Crude benchmarks are simulated around fixed base prices; the USD/THB quote
comes from the exchange-rate provider when it answers.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pydantic import ValidationError

from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import PriceQuote, WorldPrices
from oilinfo.services.world.constants import (
    BENCHMARK_BASE_PRICES,
    CHANGE_SPREAD,
    FALLBACK_WORLD_QUOTES,
    PRICE_SPREAD,
    THB_CHANGE_SPREAD,
    THB_FALLBACK_QUOTE,
    WORLD_PRICES_CACHE_KEY,
    WORLD_PRICES_CACHE_TTL_SECONDS,
)


if TYPE_CHECKING:
    from oilinfo.cache.store import CacheStore
    from oilinfo.clients.exchange_rate.client import ExchangeRateClient

logger = get_logger(__name__)


def fallback_world_prices() -> WorldPrices:
    """Fixed snapshot served when generation fails."""
    return WorldPrices(
        **{
            name: PriceQuote(price=price, change=change)
            for name, (price, change) in FALLBACK_WORLD_QUOTES.items()
        }
    )


class WorldPriceService:
    """Service for crude benchmarks and the USD/THB rate."""

    def __init__(
        self,
        store: CacheStore,
        exchange: ExchangeRateClient,
        ttl_seconds: int = WORLD_PRICES_CACHE_TTL_SECONDS,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._exchange = exchange
        self._ttl = ttl_seconds
        self._rng = rng or random.Random()

    async def get_world_prices(self) -> WorldPrices:
        """Get world prices, returning the fallback snapshot on any failure."""
        cached = await self._store.get(WORLD_PRICES_CACHE_KEY, self._ttl)
        if cached is not None:
            try:
                return WorldPrices.model_validate(cached)
            except ValidationError:
                logger.warning("Discarding malformed cached world prices")

        try:
            world = await self._generate()
        except Exception as e:
            logger.opt(exception=e).error("Failed to generate world prices")
            return fallback_world_prices()

        await self._store.put(
            WORLD_PRICES_CACHE_KEY,
            world.model_dump(mode="json"),
            self._ttl,
        )
        logger.info("World prices generated")
        return world

    async def _generate(self) -> WorldPrices:
        rate = await self._exchange.fetch_usd_thb()

        quotes = {
            name: PriceQuote(
                price=round(base + self._rng.uniform(-PRICE_SPREAD, PRICE_SPREAD), 2),
                change=round(self._rng.uniform(-CHANGE_SPREAD, CHANGE_SPREAD), 2),
            )
            for name, base in BENCHMARK_BASE_PRICES.items()
        }

        if rate is None:
            price, change = THB_FALLBACK_QUOTE
            quotes["thb"] = PriceQuote(price=price, change=change)
        else:
            quotes["thb"] = PriceQuote(
                price=round(rate, 2),
                change=round(self._rng.uniform(-THB_CHANGE_SPREAD, THB_CHANGE_SPREAD), 2),
            )

        return WorldPrices(**quotes)

"""Historical price trend service.

There is no historical data source, so the trend is synthesized: a random
walk starting at today's price and pinned so the final point is exactly
today's price.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import HistoricalSeries
from oilinfo.services.history.constants import (
    DEFAULT_TIMEZONE,
    HISTORICAL_PRICES_CACHE_KEY,
    HISTORICAL_PRICES_CACHE_TTL_SECONDS,
    HISTORY_DAYS,
    SERIES_VOLATILITY,
    THAI_SHORT_MONTHS,
    TREND_PER_DAY,
)


if TYPE_CHECKING:
    from collections.abc import Callable

    from oilinfo.cache.store import CacheStore
    from oilinfo.services.prices.service import PriceService

logger = get_logger(__name__)


def thai_short_date(day: date) -> str:
    """Format a date as day and Thai short month, e.g. ``19 ต.ค.``."""
    return f"{day.day} {THAI_SHORT_MONTHS[day.month - 1]}"


def date_labels(today: date, days: int = HISTORY_DAYS) -> list[str]:
    """Labels for the ``days`` calendar dates ending today, oldest first."""
    return [thai_short_date(today - timedelta(days=offset)) for offset in range(days - 1, -1, -1)]


def generate_trend(
    current_price: float,
    volatility: float,
    rng: random.Random,
    days: int = HISTORY_DAYS,
) -> list[float]:
    """Random walk of ``days`` points whose last point is ``current_price``."""
    prices: list[float] = []
    price = current_price
    for i in range(days):
        change = rng.uniform(-volatility / 2, volatility / 2)
        trend = TREND_PER_DAY * (days - i)
        price = price + change + trend
        prices.append(round(price, 2))
    prices[-1] = current_price
    return prices


class HistoryService:
    """Service for the daily price trend of the headline grades."""

    def __init__(
        self,
        store: CacheStore,
        prices: PriceService,
        ttl_seconds: int = HISTORICAL_PRICES_CACHE_TTL_SECONDS,
        days: int = HISTORY_DAYS,
        timezone: str = DEFAULT_TIMEZONE,
        rng: random.Random | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the history service.

        Args:
            store: Cache store shared by all services.
            prices: Source of today's prices.
            ttl_seconds: Cache lifetime of a generated series.
            days: Number of points per series.
            timezone: IANA zone that decides what "today" is.
            rng: Entropy source for the walk.
            today: Override for the current local date.
        """
        self._store = store
        self._prices = prices
        self._ttl = ttl_seconds
        self._days = days
        self._tz = ZoneInfo(timezone)
        self._rng = rng or random.Random()
        self._today = today or self._local_today

    def _local_today(self) -> date:
        return datetime.now(self._tz).date()

    async def get_historical_prices(self) -> HistoricalSeries:
        """Get the trend series, generating it on a cache miss."""
        cached = await self._store.get(HISTORICAL_PRICES_CACHE_KEY, self._ttl)
        if cached is not None:
            try:
                return HistoricalSeries.model_validate(cached)
            except ValidationError:
                logger.warning("Discarding malformed cached history")

        prices, is_fallback = await self._prices.get_current_prices_with_source()
        current = {
            "gasoline95": prices.gasoline95.price,
            "gasohol95": prices.gasohol95.price,
            "diesel_b7": prices.diesel_b7.price,
        }
        series = HistoricalSeries(
            labels=date_labels(self._today(), self._days),
            **{
                name: generate_trend(current[name], volatility, self._rng, self._days)
                for name, volatility in SERIES_VOLATILITY.items()
            },
        )
        logger.info("Historical data generated", days=self._days)

        if is_fallback:
            logger.info("History built from fallback prices, not caching")
        else:
            await self._store.put(
                HISTORICAL_PRICES_CACHE_KEY,
                series.model_dump(mode="json"),
                self._ttl,
            )
        return series

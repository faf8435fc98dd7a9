"""Shared test fixtures for the OilInfo service tests.

Unit tests are fast and isolated: Redis is replaced by an in-memory mock,
HTTP providers by respx or mocked clients, and time and randomness are
pinned.
"""

from __future__ import annotations

import os


os.environ.setdefault("APP_ENV", "test")

from datetime import UTC, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from oilinfo.cache.store import CacheStore  # noqa: E402
from oilinfo.schemas.prices import CurrentPrices  # noqa: E402
from oilinfo.services.prices.service import fallback_prices  # noqa: E402


FIXED_NOW = datetime(2026, 10, 19, 5, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Clock pinned to a fixed UTC instant."""
    return FakeClock()


@pytest.fixture
def mock_redis() -> MagicMock:
    """Mock async Redis client backed by a dict (``mock_redis.storage``)."""
    storage: dict[str, bytes] = {}

    def _setex(key: str, _ttl: int, value: bytes) -> bool:
        storage[key] = value
        return True

    client = MagicMock()
    client.storage = storage
    client.get = AsyncMock(side_effect=storage.get)
    client.setex = AsyncMock(side_effect=_setex)
    client.ping = AsyncMock(return_value=True)
    return client


@pytest.fixture
def store(mock_redis: MagicMock, clock: FakeClock) -> CacheStore:
    """Cache store over the in-memory Redis mock."""
    return CacheStore(mock_redis, prefix="oilinfo", clock=clock)


@pytest.fixture
def unavailable_store() -> CacheStore:
    """Cache store with no Redis connection."""
    return CacheStore(None)


@pytest.fixture
def provider_payload() -> dict[str, Any]:
    """Provider response covering every grade except gasoline 91."""
    return {
        "Data": [
            {"NameEN": "Hi Premium 97", "NameTH": "ไฮพรีเมียม 97", "Today": "45.84", "Diff": "0.30"},
            {"NameEN": "Gasohol 95 S EVO", "NameTH": "แก๊สโซฮอล์ 95 เอส อีโว", "Today": "37.05", "Diff": "-0.40"},
            {"NameEN": "Gasohol 91 S EVO", "NameTH": "แก๊สโซฮอล์ 91 เอส อีโว", "Today": "36.68", "Diff": "-0.40"},
            {"NameEN": "Gasohol E20 S EVO", "NameTH": "แก๊สโซฮอล์ อี 20 เอส อีโว", "Today": "35.34", "Diff": "-0.40"},
            {"NameEN": "Gasohol E85 S EVO", "NameTH": "แก๊สโซฮอล์ อี 85 เอส อีโว", "Today": "34.89", "Diff": "0"},
            {"NameEN": "Hi Diesel B7", "NameTH": "ไฮดีเซล B7", "Today": "32.94", "Diff": "-0.50"},
            {"NameEN": "Hi Diesel B20", "NameTH": "ไฮดีเซล B20", "Today": "32.44", "Diff": "-0.50"},
        ],
        "LastUpdate": "19/10/2026 05:00",
    }


@pytest.fixture
def current_prices() -> CurrentPrices:
    """Fallback snapshot used as a known set of current prices."""
    return fallback_prices(FIXED_NOW)


@pytest.fixture
def mock_price_service(current_prices: CurrentPrices) -> MagicMock:
    """PriceService mock returning live (non-fallback) prices."""
    service = MagicMock()
    service.get_current_prices = AsyncMock(return_value=current_prices)
    service.get_current_prices_with_source = AsyncMock(return_value=(current_prices, False))
    return service

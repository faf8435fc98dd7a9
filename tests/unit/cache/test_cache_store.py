"""Unit tests for the timestamped cache store.

Tests cover:
- Round trip and key namespacing
- Freshness decided from the stored timestamp
- Unavailable, failing and corrupt backends
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import orjson
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from oilinfo.cache.exceptions import CacheError
from oilinfo.cache.store import CacheEntry, CacheStore


if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from tests.conftest import FakeClock


pytestmark = pytest.mark.unit


class TestRoundTrip:
    """Tests for put followed by get."""

    async def test_get_returns_stored_payload(self, store: CacheStore) -> None:
        """Should return exactly what was stored."""
        payload = {"gasoline95": {"price": 38.42, "change": -0.2}}

        assert await store.put("current_prices", payload, 3600) is True
        assert await store.get("current_prices", 3600) == payload

    async def test_keys_are_namespaced(self, store: CacheStore, mock_redis: MagicMock) -> None:
        """Should prefix keys and set the Redis expiry to the TTL."""
        await store.put("world_prices", {"a": 1}, 3600)

        key, ttl, _ = mock_redis.setex.call_args.args
        assert key == "oilinfo:world_prices"
        assert ttl == 3600

    async def test_stored_document_carries_timestamp(
        self,
        store: CacheStore,
        mock_redis: MagicMock,
        clock: FakeClock,
    ) -> None:
        """Should store data, timestamp and ttl together."""
        await store.put("brand_comparison", [1, 2], 3600)

        doc = orjson.loads(mock_redis.storage["oilinfo:brand_comparison"])
        assert doc == {"data": [1, 2], "timestamp": clock.now.isoformat(), "ttl": 3600}

    async def test_missing_key_is_none(self, store: CacheStore) -> None:
        """Should return None for keys never written."""
        assert await store.get("historical_prices", 21600) is None

    async def test_overwrite_replaces_entry(self, store: CacheStore) -> None:
        """Should replace the previous entry wholesale."""
        await store.put("k", {"v": 1}, 60)
        await store.put("k", {"w": 2}, 60)

        assert await store.get("k", 60) == {"w": 2}


class TestFreshness:
    """Tests for age-based expiry."""

    async def test_fresh_just_before_max_age(self, store: CacheStore, clock: FakeClock) -> None:
        """Should still return the entry one second before max age."""
        await store.put("k", "v", 3600)
        clock.advance(3599)

        assert await store.get("k", 3600) == "v"

    async def test_expired_at_max_age(self, store: CacheStore, clock: FakeClock) -> None:
        """Should treat the entry as absent once its age reaches max age."""
        await store.put("k", "v", 3600)
        clock.advance(3600)

        assert await store.get("k", 3600) is None

    async def test_reader_decides_max_age(self, store: CacheStore, clock: FakeClock) -> None:
        """Should apply the reader's max age, not the stored TTL."""
        await store.put("k", "v", 21600)
        clock.advance(120)

        assert await store.get("k", 60) is None
        assert await store.get("k", 21600) == "v"


class TestUnavailableStore:
    """Tests for a store with no Redis connection."""

    async def test_get_is_miss(self, unavailable_store: CacheStore) -> None:
        """Should report a miss instead of raising."""
        assert await unavailable_store.get("current_prices", 3600) is None

    async def test_put_reports_failure(self, unavailable_store: CacheStore) -> None:
        """Should return False instead of raising."""
        assert await unavailable_store.put("current_prices", {}, 3600) is False

    async def test_get_entry_raises_cache_error(self, unavailable_store: CacheStore) -> None:
        """Should raise CacheError from the low-level accessor."""
        with pytest.raises(CacheError, match="not available"):
            await unavailable_store.get_entry("current_prices")

    def test_available_flag(self, unavailable_store: CacheStore, store: CacheStore) -> None:
        """Should expose whether a backend is connected."""
        assert unavailable_store.available is False
        assert store.available is True


class TestBackendFailures:
    """Tests for Redis errors and corrupt entries."""

    async def test_read_error_is_miss(self, store: CacheStore, mock_redis: MagicMock) -> None:
        """Should treat a Redis read error as a miss."""
        mock_redis.get = AsyncMock(side_effect=RedisConnectionError("refused"))

        assert await store.get("k", 60) is None

    async def test_write_error_returns_false(self, store: CacheStore, mock_redis: MagicMock) -> None:
        """Should swallow a Redis write error and report False."""
        mock_redis.setex = AsyncMock(side_effect=RedisConnectionError("refused"))

        assert await store.put("k", {"v": 1}, 60) is False

    async def test_corrupt_json_is_miss(self, store: CacheStore, mock_redis: MagicMock) -> None:
        """Should treat undecodable bytes as a miss."""
        mock_redis.storage["oilinfo:k"] = b"not json"

        assert await store.get("k", 60) is None

    async def test_missing_fields_is_miss(self, store: CacheStore, mock_redis: MagicMock) -> None:
        """Should treat a document without a timestamp as a miss."""
        mock_redis.storage["oilinfo:k"] = orjson.dumps({"data": 1})

        assert await store.get("k", 60) is None

    async def test_corrupt_entry_raises_from_get_entry(
        self,
        store: CacheStore,
        mock_redis: MagicMock,
    ) -> None:
        """Should surface corruption as CacheError at the low level."""
        mock_redis.storage["oilinfo:k"] = b"[1, 2"

        with pytest.raises(CacheError, match="Corrupt"):
            await store.get_entry("k")


class TestCacheEntry:
    """Tests for the CacheEntry dataclass."""

    async def test_put_entry_returns_entry(self, store: CacheStore, clock: FakeClock) -> None:
        """Should return the entry it wrote."""
        entry = await store.put_entry("k", {"v": 1}, 60)

        assert entry == CacheEntry(key="k", payload={"v": 1}, stored_at=clock.now, ttl_seconds=60)

    def test_is_frozen(self, clock: FakeClock) -> None:
        """Should be immutable."""
        entry = CacheEntry(key="k", payload=1, stored_at=clock.now, ttl_seconds=60)

        with pytest.raises(AttributeError):
            entry.payload = 2  # type: ignore[misc]

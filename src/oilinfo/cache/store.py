"""Timestamped key/value cache backed by Redis.

Each entry records when it was stored; freshness is decided by the reader,
which passes the maximum age it accepts. The Redis key TTL only bounds how
long stale entries occupy memory.

Cache Strategy:
- Key: "{prefix}:{key}"
- Value: JSON document {"data", "timestamp", "ttl"}
- Read or write failures never fail a request
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import orjson
from redis.exceptions import RedisError

from oilinfo.cache.exceptions import CacheError
from oilinfo.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable

    from redis.asyncio import Redis

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached payload and the moment it was stored."""

    key: str
    payload: Any
    stored_at: datetime
    ttl_seconds: int

    def age_seconds(self, now: datetime) -> float:
        return (now - self.stored_at).total_seconds()

    def is_fresh(self, now: datetime, max_age_seconds: int) -> bool:
        return self.age_seconds(now) < max_age_seconds


class CacheStore:
    """Get/put cache with per-entry timestamps.

    Constructed once at startup. A ``None`` client means the store is
    unavailable: every read is a miss and every write is dropped.
    """

    def __init__(
        self,
        client: Redis[Any] | None,
        prefix: str = "oilinfo",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._prefix = prefix
        self._clock = clock

    @property
    def available(self) -> bool:
        return self._client is not None

    def _make_key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str, max_age_seconds: int = DEFAULT_TTL_SECONDS) -> Any | None:
        """Return the cached payload, or None if absent, expired or unreadable."""
        try:
            entry = await self.get_entry(key)
        except CacheError as e:
            logger.warning("Cache read error", key=key, error=str(e))
            return None

        if entry is None:
            return None

        now = self._clock()
        if not entry.is_fresh(now, max_age_seconds):
            logger.info(
                "Cache expired",
                key=key,
                age_s=round(entry.age_seconds(now)),
            )
            return None

        return entry.payload

    async def put(self, key: str, payload: Any, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> bool:
        """Store a payload. Returns False (after logging) if the write failed."""
        try:
            await self.put_entry(key, payload, ttl_seconds)
        except CacheError as e:
            logger.error("Cache write error", key=key, error=str(e))
            return False

        logger.info("Cached", key=key, ttl=ttl_seconds)
        return True

    async def get_entry(self, key: str) -> CacheEntry | None:
        """Read the raw entry.

        Raises:
            CacheError: If the store is unavailable or the entry is corrupt.
        """
        if self._client is None:
            msg = "Cache store not available"
            raise CacheError(msg, key=key)

        try:
            raw = await self._client.get(self._make_key(key))
        except RedisError as e:
            raise CacheError(str(e), key=key) from e

        if raw is None:
            return None

        try:
            doc = orjson.loads(raw)
            return CacheEntry(
                key=key,
                payload=doc["data"],
                stored_at=datetime.fromisoformat(doc["timestamp"]),
                ttl_seconds=int(doc["ttl"]),
            )
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            msg = f"Corrupt cache entry: {e}"
            raise CacheError(msg, key=key) from e

    async def put_entry(self, key: str, payload: Any, ttl_seconds: int) -> CacheEntry:
        """Write an entry, replacing any previous one.

        Raises:
            CacheError: If the store is unavailable or rejects the write.
        """
        if self._client is None:
            msg = "Cache store not available"
            raise CacheError(msg, key=key)

        entry = CacheEntry(
            key=key,
            payload=payload,
            stored_at=self._clock(),
            ttl_seconds=ttl_seconds,
        )
        doc = {
            "data": entry.payload,
            "timestamp": entry.stored_at.isoformat(),
            "ttl": entry.ttl_seconds,
        }

        try:
            await self._client.setex(self._make_key(key), ttl_seconds, orjson.dumps(doc))
        except (RedisError, TypeError) as e:
            raise CacheError(str(e), key=key) from e

        return entry

"""Redis caching layer.

This module provides:
- Redis connection management
- A timestamped get/put cache store used by every data service
"""

from oilinfo.cache.exceptions import CacheError
from oilinfo.cache.redis import (
    check_redis_health,
    close_redis_pool,
    get_cache_client,
    init_redis_pool,
)
from oilinfo.cache.store import CacheEntry, CacheStore


__all__ = [
    "CacheEntry",
    "CacheError",
    "CacheStore",
    "check_redis_health",
    "close_redis_pool",
    "get_cache_client",
    "init_redis_pool",
]

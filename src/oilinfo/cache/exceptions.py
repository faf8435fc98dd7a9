"""Exceptions for the cache layer."""

from __future__ import annotations


class CacheError(Exception):
    """Raised when the cache store is unreachable or rejects an operation.

    Cache errors never propagate to request handlers - reads degrade to a
    miss and writes are logged and dropped.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)

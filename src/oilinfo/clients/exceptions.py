"""Upstream provider exceptions."""

from __future__ import annotations


class UpstreamError(Exception):
    """Raised when a provider is unreachable, times out, or returns non-2xx."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


class SchemaError(Exception):
    """Raised when a provider payload does not have the expected shape."""

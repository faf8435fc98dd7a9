"""Bangchak fuel-price API client.

Fetches the raw daily retail price list. Parsing into grades is done by the
prices service; this client only guarantees a decoded JSON document.
"""

from __future__ import annotations

from typing import Any, Final

import httpx
import orjson

from oilinfo.clients.exceptions import SchemaError, UpstreamError
from oilinfo.observability.logging import get_logger


logger = get_logger(__name__)


class BangchakClient:
    """Client for the Bangchak oil-price API."""

    PROVIDER: Final[str] = "bangchak"
    DEFAULT_URL: Final[str] = "https://oil-price.bangchak.co.th/ApiOilPrice2"

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: float = 10.0,
        user_agent: str = "OilInfoApp/1.0",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Provider endpoint.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            http_client: Shared HTTP client. Created on initialize() if omitted.
        """
        self._url = url
        self._timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        self._http = http_client
        self._owns_http_client = http_client is None

    async def initialize(self) -> None:
        """Initialize the HTTP client if not provided."""
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        logger.info("BangchakClient initialized", url=self._url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.info("BangchakClient shutdown")

    async def fetch_current_prices(self) -> Any:
        """Fetch today's price list.

        Returns:
            The decoded JSON body.

        Raises:
            UpstreamError: On network failure, timeout, or a non-2xx status.
            SchemaError: If the body is not valid JSON.
        """
        if self._http is None:
            msg = "HTTP client not initialized"
            raise UpstreamError(self.PROVIDER, msg)

        logger.info("Fetching fuel prices", url=self._url)

        try:
            response = await self._http.get(
                self._url,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            msg = f"request timed out after {self._timeout}s"
            raise UpstreamError(self.PROVIDER, msg) from e
        except httpx.HTTPError as e:
            raise UpstreamError(self.PROVIDER, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise UpstreamError(
                self.PROVIDER,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON from {self.PROVIDER}: {e}"
            raise SchemaError(msg) from e

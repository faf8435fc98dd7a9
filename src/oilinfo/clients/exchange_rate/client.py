"""USD exchange-rate API client.

Best-effort lookup of the USD/THB rate. Every failure is logged and reported
as ``None`` so callers can substitute a fixed quote.
"""

from __future__ import annotations

from typing import Final

import httpx
from pydantic import ValidationError

from oilinfo.observability.logging import get_logger
from oilinfo.schemas.base import DownstreamResponse


logger = get_logger(__name__)


class ExchangeRatesPayload(DownstreamResponse):
    """Subset of the provider response we rely on."""

    rates: dict[str, float]


class ExchangeRateClient:
    """Client for the exchangerate-api.com latest-rates endpoint."""

    PROVIDER: Final[str] = "exchange_rate"
    DEFAULT_URL: Final[str] = "https://api.exchangerate-api.com/v4/latest/USD"

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._http = http_client
        self._owns_http_client = http_client is None

    async def initialize(self) -> None:
        """Initialize the HTTP client if not provided."""
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        logger.info("ExchangeRateClient initialized", url=self._url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.info("ExchangeRateClient shutdown")

    async def fetch_usd_thb(self) -> float | None:
        """Return the current USD/THB rate rounded to 2 decimals, or None."""
        if self._http is None:
            logger.warning("HTTP client not initialized")
            return None

        try:
            response = await self._http.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            payload = ExchangeRatesPayload.model_validate_json(response.content)
        except httpx.HTTPError as e:
            logger.warning(
                "Exchange rate request failed",
                url=self._url,
                error=str(e) or type(e).__name__,
            )
            return None
        except ValidationError as e:
            logger.warning(
                "Exchange rate payload invalid",
                url=self._url,
                errors=e.error_count(),
            )
            return None

        rate = payload.rates.get("THB")
        if rate is None:
            logger.warning("Exchange rate payload missing THB", url=self._url)
            return None

        return round(rate, 2)

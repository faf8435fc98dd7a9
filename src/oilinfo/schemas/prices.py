"""Fuel-price response schemas.

Every view served by the API is built from these models. Field names are
snake_case in Python and camelCase on the wire (``diesel_b7`` -> ``dieselB7``).
"""

from __future__ import annotations

from pydantic import Field

from oilinfo.schemas.base import APIResponse


class PriceQuote(APIResponse):
    """Price and day-over-day change for a single grade or benchmark."""

    price: float = Field(..., description="Price in THB per litre (USD per barrel for crude)")
    change: float = Field(..., description="Change since the previous quote")


class CurrentPrices(APIResponse):
    """Current retail prices for every tracked fuel grade."""

    gasoline95: PriceQuote
    gasoline91: PriceQuote
    gasohol95: PriceQuote
    gasohol91: PriceQuote
    e20: PriceQuote
    e85: PriceQuote
    diesel_b7: PriceQuote
    diesel_b20: PriceQuote
    updated_at: str = Field(..., description="Provider update time or fetch time")


class GasolineBrandPrice(APIResponse):
    brand: str
    g95: float
    g91: float


class GasoholBrandPrice(APIResponse):
    brand: str
    gh95: float
    gh91: float
    e20: float


class DieselBrandPrice(APIResponse):
    brand: str
    b7: float
    b20: float


class BrandComparison(APIResponse):
    """Per-brand prices grouped by fuel category."""

    gasoline: list[GasolineBrandPrice]
    gasohol: list[GasoholBrandPrice]
    diesel: list[DieselBrandPrice]


class HistoricalSeries(APIResponse):
    """Daily price trend ending at today's price."""

    labels: list[str] = Field(..., description="Localized dates, oldest first")
    gasoline95: list[float]
    gasohol95: list[float]
    diesel_b7: list[float]


class WorldPrices(APIResponse):
    """Crude oil benchmarks and the USD/THB exchange rate."""

    wti: PriceQuote
    brent: PriceQuote
    dubai: PriceQuote
    thb: PriceQuote

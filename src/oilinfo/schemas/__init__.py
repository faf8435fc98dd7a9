"""Pydantic schemas for API responses and provider payloads."""

from oilinfo.schemas.health import HealthResponse, ReadinessResponse
from oilinfo.schemas.prices import (
    BrandComparison,
    CurrentPrices,
    DieselBrandPrice,
    GasoholBrandPrice,
    GasolineBrandPrice,
    HistoricalSeries,
    PriceQuote,
    WorldPrices,
)


__all__ = [
    "BrandComparison",
    "CurrentPrices",
    "DieselBrandPrice",
    "GasoholBrandPrice",
    "GasolineBrandPrice",
    "HealthResponse",
    "HistoricalSeries",
    "PriceQuote",
    "ReadinessResponse",
    "WorldPrices",
]

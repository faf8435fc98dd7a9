"""Constants for the world crude-price service."""

from __future__ import annotations

from typing import Final


# Cache Configuration
WORLD_PRICES_CACHE_KEY: Final[str] = "world_prices"
WORLD_PRICES_CACHE_TTL_SECONDS: Final[int] = 60 * 60  # 1 hour

# Benchmark base prices, USD/barrel.
BENCHMARK_BASE_PRICES: Final[dict[str, float]] = {
    "wti": 75.42,
    "brent": 79.15,
    "dubai": 77.80,
}

PRICE_SPREAD: Final[float] = 2.5
CHANGE_SPREAD: Final[float] = 1.5
THB_CHANGE_SPREAD: Final[float] = 0.1

# Used when the exchange-rate provider is unavailable.
THB_FALLBACK_QUOTE: Final[tuple[float, float]] = (34.85, 0.0)

FALLBACK_WORLD_QUOTES: Final[dict[str, tuple[float, float]]] = {
    "wti": (75.42, 1.2),
    "brent": (79.15, 0.8),
    "dubai": (77.80, -0.5),
    "thb": THB_FALLBACK_QUOTE,
}

"""Constants for the current-prices service."""

from __future__ import annotations

from typing import Final


# Cache Configuration
CURRENT_PRICES_CACHE_KEY: Final[str] = "current_prices"
CURRENT_PRICES_CACHE_TTL_SECONDS: Final[int] = 60 * 60  # 1 hour

# Provider product names per grade, tried in order. English names first,
# then the Thai product names used on the provider's Thai listing.
GRADE_ALIASES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("gasoline95", ("Hi Premium 97", "Premium 97", "Gasoline 97", "เบนซิน 97")),
    ("gasoline91", ("Gasoline 91", "เบนซิน 91")),
    ("gasohol95", ("Gasohol 95", "แก๊สโซฮอล์ 95")),
    ("gasohol91", ("Gasohol 91", "แก๊สโซฮอล์ 91")),
    ("e20", ("Gasohol E20", "E20", "อี 20")),
    ("e85", ("Gasohol E85", "E85", "อี 85")),
    ("diesel_b7", ("Hi Diesel B7", "Diesel B7", "ดีเซล B7")),
    ("diesel_b20", ("Hi Diesel B20", "Diesel B20", "ดีเซล B20")),
)

# Served when the provider is unreachable or returns garbage.
FALLBACK_QUOTES: Final[dict[str, tuple[float, float]]] = {
    "gasoline95": (38.42, -0.20),
    "gasoline91": (35.67, 0.15),
    "gasohol95": (36.89, 0.0),
    "gasohol91": (34.12, -0.30),
    "e20": (32.55, -0.25),
    "e85": (28.90, 0.10),
    "diesel_b7": (32.44, -0.18),
    "diesel_b20": (31.89, -0.22),
}

"""Constants for the historical trend service."""

from __future__ import annotations

from typing import Final


# Cache Configuration
HISTORICAL_PRICES_CACHE_KEY: Final[str] = "historical_prices"
HISTORICAL_PRICES_CACHE_TTL_SECONDS: Final[int] = 6 * 60 * 60  # 6 hours

HISTORY_DAYS: Final[int] = 30
DEFAULT_TIMEZONE: Final[str] = "Asia/Bangkok"

# Daily random-walk amplitude per series, THB/litre.
SERIES_VOLATILITY: Final[dict[str, float]] = {
    "gasoline95": 0.5,
    "gasohol95": 0.4,
    "diesel_b7": 0.3,
}

# Drift per step, scaled by the distance from today.
TREND_PER_DAY: Final[float] = -0.003

THAI_SHORT_MONTHS: Final[tuple[str, ...]] = (
    "ม.ค.",
    "ก.พ.",
    "มี.ค.",
    "เม.ย.",
    "พ.ค.",
    "มิ.ย.",
    "ก.ค.",
    "ส.ค.",
    "ก.ย.",
    "ต.ค.",
    "พ.ย.",
    "ธ.ค.",
)

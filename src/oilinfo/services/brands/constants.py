"""Constants for the brand comparison service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


# Cache Configuration
BRAND_COMPARISON_CACHE_KEY: Final[str] = "brand_comparison"
BRAND_COMPARISON_CACHE_TTL_SECONDS: Final[int] = 60 * 60  # 1 hour

# Reference brand; its prices are the provider's prices.
REFERENCE_BRAND: Final[str] = "Bangchak"


@dataclass(frozen=True, slots=True)
class BrandOffsets:
    """THB/litre added to the reference price per fuel category.

    A ``None`` category means the brand is not listed there.
    """

    gasoline: float | None = None
    gasohol: float | None = None
    e20: float | None = None
    diesel: float | None = None


# Listed in display order after the reference brand.
BRAND_OFFSETS: Final[dict[str, BrandOffsets]] = {
    "PTT": BrandOffsets(gasoline=0.05, gasohol=0.05, e20=0.04, diesel=0.05),
    "Shell": BrandOffsets(gasoline=0.08, gasohol=0.07, e20=0.06, diesel=0.08),
    "Esso": BrandOffsets(gasoline=0.06, gasohol=0.06, e20=0.05, diesel=0.06),
    "Caltex": BrandOffsets(gasoline=0.04),
}

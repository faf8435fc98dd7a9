"""Brand comparison service.

Other retailers are priced as the reference price plus a fixed margin per
fuel category.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import (
    BrandComparison,
    CurrentPrices,
    DieselBrandPrice,
    GasoholBrandPrice,
    GasolineBrandPrice,
)
from oilinfo.services.brands.constants import (
    BRAND_COMPARISON_CACHE_KEY,
    BRAND_COMPARISON_CACHE_TTL_SECONDS,
    BRAND_OFFSETS,
    REFERENCE_BRAND,
)


if TYPE_CHECKING:
    from oilinfo.cache.store import CacheStore
    from oilinfo.services.prices.service import PriceService

logger = get_logger(__name__)


def _adjust(price: float, offset: float) -> float:
    return round(price + offset, 2)


def build_brand_comparison(prices: CurrentPrices) -> BrandComparison:
    """Derive every brand's prices from the current reference prices."""
    gasoline = [
        GasolineBrandPrice(
            brand=REFERENCE_BRAND,
            g95=prices.gasoline95.price,
            g91=prices.gasoline91.price,
        )
    ]
    gasohol = [
        GasoholBrandPrice(
            brand=REFERENCE_BRAND,
            gh95=prices.gasohol95.price,
            gh91=prices.gasohol91.price,
            e20=prices.e20.price,
        )
    ]
    diesel = [
        DieselBrandPrice(
            brand=REFERENCE_BRAND,
            b7=prices.diesel_b7.price,
            b20=prices.diesel_b20.price,
        )
    ]

    for brand, offsets in BRAND_OFFSETS.items():
        if offsets.gasoline is not None:
            gasoline.append(
                GasolineBrandPrice(
                    brand=brand,
                    g95=_adjust(prices.gasoline95.price, offsets.gasoline),
                    g91=_adjust(prices.gasoline91.price, offsets.gasoline),
                )
            )
        if offsets.gasohol is not None and offsets.e20 is not None:
            gasohol.append(
                GasoholBrandPrice(
                    brand=brand,
                    gh95=_adjust(prices.gasohol95.price, offsets.gasohol),
                    gh91=_adjust(prices.gasohol91.price, offsets.gasohol),
                    e20=_adjust(prices.e20.price, offsets.e20),
                )
            )
        if offsets.diesel is not None:
            diesel.append(
                DieselBrandPrice(
                    brand=brand,
                    b7=_adjust(prices.diesel_b7.price, offsets.diesel),
                    b20=_adjust(prices.diesel_b20.price, offsets.diesel),
                )
            )

    return BrandComparison(gasoline=gasoline, gasohol=gasohol, diesel=diesel)


class BrandService:
    """Service for the per-brand price comparison."""

    def __init__(
        self,
        store: CacheStore,
        prices: PriceService,
        ttl_seconds: int = BRAND_COMPARISON_CACHE_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._prices = prices
        self._ttl = ttl_seconds

    async def get_brand_comparison(self) -> BrandComparison:
        """Get the brand comparison, building it from current prices on a miss."""
        cached = await self._store.get(BRAND_COMPARISON_CACHE_KEY, self._ttl)
        if cached is not None:
            try:
                return BrandComparison.model_validate(cached)
            except ValidationError:
                logger.warning("Discarding malformed cached brand comparison")

        prices, is_fallback = await self._prices.get_current_prices_with_source()
        comparison = build_brand_comparison(prices)

        if is_fallback:
            logger.info("Brand comparison built from fallback prices, not caching")
        else:
            await self._store.put(
                BRAND_COMPARISON_CACHE_KEY,
                comparison.model_dump(mode="json"),
                self._ttl,
            )
        return comparison

"""World crude-price and exchange-rate service package."""

from oilinfo.services.world.service import WorldPriceService, fallback_world_prices


__all__ = [
    "WorldPriceService",
    "fallback_world_prices",
]

"""Current fuel-price service package.

Fetches the provider price list, normalizes it into grades, and falls back
to a fixed snapshot when the provider is unavailable.
"""

from oilinfo.services.prices.service import PriceService, fallback_prices
from oilinfo.services.prices.transformer import transform_provider_payload


__all__ = [
    "PriceService",
    "fallback_prices",
    "transform_provider_payload",
]

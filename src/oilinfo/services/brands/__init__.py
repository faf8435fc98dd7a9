"""Brand comparison service package."""

from oilinfo.services.brands.service import BrandService, build_brand_comparison


__all__ = [
    "BrandService",
    "build_brand_comparison",
]

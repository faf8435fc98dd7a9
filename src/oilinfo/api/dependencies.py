"""FastAPI dependencies for service access.

Services are built once during application startup and stored in
``app.state``. A service that is missing there means startup did not run
or failed, which is reported as 503.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import Request

from oilinfo.core.config import Settings, get_settings
from oilinfo.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from oilinfo.services.brands.service import BrandService
    from oilinfo.services.history.service import HistoryService
    from oilinfo.services.prices.service import PriceService
    from oilinfo.services.world.service import WorldPriceService


def _from_state(request: Request, name: str, label: str) -> Any:
    service = getattr(request.app.state, name, None)
    if service is None:
        raise ServiceUnavailableException(f"{label} not available")
    return service


async def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_price_service(request: Request) -> PriceService:
    """Get the current-prices service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: PriceService = _from_state(request, "price_service", "Price service")
    return service


async def get_brand_service(request: Request) -> BrandService:
    """Get the brand comparison service from app state."""
    service: BrandService = _from_state(request, "brand_service", "Brand service")
    return service


async def get_history_service(request: Request) -> HistoryService:
    """Get the historical trend service from app state."""
    service: HistoryService = _from_state(request, "history_service", "History service")
    return service


async def get_world_service(request: Request) -> WorldPriceService:
    """Get the world price service from app state."""
    service: WorldPriceService = _from_state(request, "world_service", "World price service")
    return service

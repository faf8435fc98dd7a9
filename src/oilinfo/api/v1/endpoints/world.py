"""World crude-price endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from oilinfo.api.dependencies import get_world_service
from oilinfo.core.exceptions import DataUnavailableException
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import WorldPrices
from oilinfo.services.world.service import WorldPriceService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["prices"])


@router.get(
    "/world-prices",
    response_model=WorldPrices,
    summary="Crude benchmarks and USD/THB",
)
async def get_world_prices(
    service: Annotated[WorldPriceService, Depends(get_world_service)],
) -> WorldPrices:
    logger.info("API request: world prices")
    try:
        return await service.get_world_prices()
    except Exception as e:
        logger.opt(exception=e).error("Failed to fetch world prices")
        raise DataUnavailableException(
            message="Failed to fetch world prices",
            error=str(e),
        ) from e

"""Current fuel-price endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from oilinfo.api.dependencies import get_price_service
from oilinfo.core.exceptions import DataUnavailableException
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import CurrentPrices
from oilinfo.services.prices.service import PriceService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["prices"])


@router.get(
    "/prices",
    response_model=CurrentPrices,
    summary="Current retail fuel prices",
    description=(
        "Today's price and change per grade. Served from cache when fresh, "
        "otherwise fetched from the provider, or a fixed snapshot if the "
        "provider is down."
    ),
)
async def get_prices(
    service: Annotated[PriceService, Depends(get_price_service)],
) -> CurrentPrices:
    logger.info("API request: current prices")
    try:
        return await service.get_current_prices()
    except Exception as e:
        logger.opt(exception=e).error("Failed to fetch prices")
        raise DataUnavailableException(message="Failed to fetch prices", error=str(e)) from e

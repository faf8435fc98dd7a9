"""Historical price trend endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from oilinfo.api.dependencies import get_history_service
from oilinfo.core.exceptions import DataUnavailableException
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import HistoricalSeries
from oilinfo.services.history.service import HistoryService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["prices"])


@router.get(
    "/history",
    response_model=HistoricalSeries,
    summary="30-day price trend",
    description="Daily trend for gasoline 95, gasohol 95 and diesel B7 ending at today's price.",
)
async def get_history(
    service: Annotated[HistoryService, Depends(get_history_service)],
) -> HistoricalSeries:
    logger.info("API request: historical prices")
    try:
        return await service.get_historical_prices()
    except Exception as e:
        logger.opt(exception=e).error("Failed to fetch history")
        raise DataUnavailableException(message="Failed to fetch history", error=str(e)) from e

"""Brand comparison endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from oilinfo.api.dependencies import get_brand_service
from oilinfo.core.exceptions import DataUnavailableException
from oilinfo.observability.logging import get_logger
from oilinfo.schemas.prices import BrandComparison
from oilinfo.services.brands.service import BrandService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["prices"])


@router.get(
    "/brands",
    response_model=BrandComparison,
    summary="Prices by retail brand",
)
async def get_brands(
    service: Annotated[BrandService, Depends(get_brand_service)],
) -> BrandComparison:
    logger.info("API request: brand comparison")
    try:
        return await service.get_brand_comparison()
    except Exception as e:
        logger.opt(exception=e).error("Failed to fetch brands")
        raise DataUnavailableException(message="Failed to fetch brands", error=str(e)) from e

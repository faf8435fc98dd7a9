"""Health check endpoints.

Provides liveness and readiness probes for container orchestrators and
load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from oilinfo.api.dependencies import get_app_settings
from oilinfo.cache.redis import check_redis_health
from oilinfo.core.config import Settings  # noqa: TC001
from oilinfo.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])

DATA_ENDPOINTS = ("/prices", "/brands", "/history", "/world-prices")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check listing the data endpoints. Does not check dependencies.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(UTC),
        endpoints=[f"{settings.api.prefix}{path}" for path in DATA_ENDPOINTS],
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Reports cache health. The service still answers without a cache.",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    dependencies = await check_redis_health()
    all_healthy = all(state == "healthy" for state in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        timestamp=datetime.now(UTC),
        version=settings.app.version,
        dependencies=dependencies,
    )

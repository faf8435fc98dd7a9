"""Health and readiness schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from oilinfo.schemas.base import APIResponse


class HealthResponse(APIResponse):
    """Liveness response listing the data endpoints."""

    status: str = Field(..., examples=["OK"])
    timestamp: datetime
    endpoints: list[str]


class ReadinessResponse(APIResponse):
    """Readiness response with dependency status."""

    status: str = Field(..., examples=["ready"])
    timestamp: datetime
    version: str
    dependencies: dict[str, str] = Field(default_factory=dict)

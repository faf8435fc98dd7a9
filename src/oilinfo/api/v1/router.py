"""API v1 router aggregating all endpoint routers.

Routes are mounted at the root by default; ``api.prefix`` can move them.
"""

from __future__ import annotations

from fastapi import APIRouter

from oilinfo.api.v1.endpoints import brands, health, history, prices, world


router = APIRouter()

router.include_router(health.router)
router.include_router(prices.router)
router.include_router(brands.router)
router.include_router(history.router)
router.include_router(world.router)

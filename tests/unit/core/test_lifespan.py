"""Unit tests for lifespan events.

Tests cover:
- Service wiring on startup
- Degraded startup without Redis
- Shutdown ordering
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import redis.asyncio as async_redis

from oilinfo.cache.store import CacheStore
from oilinfo.core.config import Settings
from oilinfo.core.events.lifespan import lifespan
from oilinfo.factory import create_app
from oilinfo.services.brands.service import BrandService
from oilinfo.services.history.service import HistoryService
from oilinfo.services.prices.service import PriceService
from oilinfo.services.world.service import WorldPriceService


pytestmark = pytest.mark.unit


class TestLifespan:
    """Tests for the lifespan context manager."""

    async def test_wires_services_with_cache(self) -> None:
        """Should build every service on app.state around the Redis client."""
        app = create_app(Settings())
        mock_redis = MagicMock()

        with (
            patch("oilinfo.core.events.lifespan.setup_logging"),
            patch(
                "oilinfo.core.events.lifespan.init_redis_pool",
                new=AsyncMock(return_value=mock_redis),
            ),
            patch("oilinfo.core.events.lifespan.close_redis_pool", new=AsyncMock()) as close,
        ):
            async with lifespan(app):
                assert isinstance(app.state.cache_store, CacheStore)
                assert app.state.cache_store.available is True
                assert isinstance(app.state.price_service, PriceService)
                assert isinstance(app.state.brand_service, BrandService)
                assert isinstance(app.state.history_service, HistoryService)
                assert isinstance(app.state.world_service, WorldPriceService)
                assert not app.state.http_client.is_closed
                assert app.state.http_client.follow_redirects is True

            close.assert_awaited_once()
            assert app.state.http_client.is_closed

    async def test_continues_without_redis(self) -> None:
        """Should start with an unavailable cache when Redis is down."""
        app = create_app(Settings())

        with (
            patch("oilinfo.core.events.lifespan.setup_logging"),
            patch(
                "oilinfo.core.events.lifespan.init_redis_pool",
                new=AsyncMock(side_effect=async_redis.ConnectionError("refused")),
            ),
            patch("oilinfo.core.events.lifespan.close_redis_pool", new=AsyncMock()),
        ):
            async with lifespan(app):
                assert app.state.cache_store.available is False
                assert app.state.price_service is not None

    async def test_uses_app_settings(self) -> None:
        """Should configure logging from the settings the app was built with."""
        app = create_app(Settings(logging={"level": "WARNING", "format": "json"}))

        with (
            patch("oilinfo.core.events.lifespan.setup_logging") as setup,
            patch(
                "oilinfo.core.events.lifespan.init_redis_pool",
                new=AsyncMock(side_effect=async_redis.ConnectionError("refused")),
            ),
            patch("oilinfo.core.events.lifespan.close_redis_pool", new=AsyncMock()),
        ):
            async with lifespan(app):
                pass

        assert setup.call_args.kwargs["log_level"] == "WARNING"

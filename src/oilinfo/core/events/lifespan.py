"""Application lifespan event handlers.

Startup builds the object graph once: Redis pool, one shared HTTP client,
the provider clients and the services. Everything lands on ``app.state``
and is torn down in reverse order on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from oilinfo.cache.redis import close_redis_pool, init_redis_pool
from oilinfo.cache.store import CacheStore
from oilinfo.clients.bangchak.client import BangchakClient
from oilinfo.clients.exchange_rate.client import ExchangeRateClient
from oilinfo.core.config import Settings, get_settings
from oilinfo.observability.logging import get_logger, setup_logging
from oilinfo.services.brands.service import BrandService
from oilinfo.services.history.service import HistoryService
from oilinfo.services.prices.service import PriceService
from oilinfo.services.world.service import WorldPriceService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from redis.asyncio import Redis

logger = get_logger(__name__)

ENDPOINTS = ("/prices", "/brands", "/history", "/world-prices", "/health", "/ready")


async def _init_cache(settings: Settings) -> Redis[bytes] | None:
    """Initialize Redis and return the client, or None if unreachable."""
    try:
        return await init_redis_pool(settings)
    except Exception:
        logger.exception("Failed to initialize Redis - continuing without cache")
        return None


def build_services(
    app: FastAPI,
    settings: Settings,
    store: CacheStore,
    http_client: httpx.AsyncClient,
) -> None:
    """Wire clients and services onto ``app.state``."""
    bangchak = BangchakClient(
        url=settings.upstream.bangchak.url,
        timeout=settings.upstream.bangchak.timeout,
        user_agent=settings.upstream.bangchak.user_agent,
        http_client=http_client,
    )
    exchange = ExchangeRateClient(
        url=settings.upstream.exchange_rate.url,
        timeout=settings.upstream.exchange_rate.timeout,
        http_client=http_client,
    )

    price_service = PriceService(
        store=store,
        client=bangchak,
        ttl_seconds=settings.cache.current_prices_ttl,
    )

    app.state.cache_store = store
    app.state.bangchak_client = bangchak
    app.state.exchange_rate_client = exchange
    app.state.price_service = price_service
    app.state.brand_service = BrandService(
        store=store,
        prices=price_service,
        ttl_seconds=settings.cache.brand_comparison_ttl,
    )
    app.state.history_service = HistoryService(
        store=store,
        prices=price_service,
        ttl_seconds=settings.cache.historical_prices_ttl,
        days=settings.history.days,
        timezone=settings.history.timezone,
    )
    app.state.world_service = WorldPriceService(
        store=store,
        exchange=exchange,
        ttl_seconds=settings.cache.world_prices_ttl,
    )


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    cache_client = await _init_cache(settings)
    store = CacheStore(cache_client, prefix=settings.redis.key_prefix)

    http_client = httpx.AsyncClient(follow_redirects=True)
    app.state.http_client = http_client

    build_services(app, settings, store, http_client)
    await app.state.bangchak_client.initialize()
    await app.state.exchange_rate_client.initialize()

    logger.info(
        "Application startup complete",
        host=settings.server.host,
        port=settings.server.port,
        cache_available=store.available,
        endpoints=[f"{settings.api.prefix}{path}" for path in ENDPOINTS],
    )


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    for name in ("exchange_rate_client", "bangchak_client"):
        client = getattr(app.state, name, None)
        if client is not None:
            await client.shutdown()

    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()
        logger.debug("HTTP client closed")

    await close_redis_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)

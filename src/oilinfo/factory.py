"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts API routers and, optionally, a static site
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from oilinfo.api.v1.router import router as v1_router
from oilinfo.core.config import Settings, get_settings
from oilinfo.core.events import lifespan
from oilinfo.core.exceptions import setup_exception_handlers
from oilinfo.core.middleware.logging import LoggingMiddleware
from oilinfo.core.middleware.request_id import RequestIDMiddleware
from oilinfo.core.middleware.timing import TimingMiddleware
from oilinfo.observability.logging import get_logger


logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Thai retail fuel prices, brand comparison, trends and world crude prices",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID for tracing)
    2. TimingMiddleware (measures request time)
    3. LoggingMiddleware (logs requests/responses)
    4. GZipMiddleware (compresses responses)
    5. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        wildcard = "*" in settings.api.cors_origins
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            # Browsers reject credentials with a wildcard origin
            allow_credentials=not wildcard,
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(LoggingMiddleware)

    app.add_middleware(TimingMiddleware, slow_threshold=settings.server.slow_request_threshold)

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers, then the static site if configured.

    The static mount catches every path, so it must come last.
    """
    app.include_router(v1_router, prefix=settings.api.prefix)

    static_dir = settings.server.static_dir
    if static_dir:
        if Path(static_dir).is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning("Static directory not found, not serving files", path=static_dir)

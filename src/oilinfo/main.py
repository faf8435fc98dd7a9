"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn oilinfo.main:app --reload

    # Production
    oilinfo
"""

from oilinfo.factory import create_app


# Create the application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    from oilinfo.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "oilinfo.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
        # Exit promptly on SIGTERM/SIGINT instead of draining requests
        timeout_graceful_shutdown=settings.server.shutdown_timeout,
    )


if __name__ == "__main__":
    run()

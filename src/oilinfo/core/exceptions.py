"""Application exceptions and exception handlers.

This module provides structured exception handling with:
- A base application exception carrying an HTTP status and error text
- FastAPI exception handlers rendering the ``{message, error}`` envelope
- A catch-all handler so a single failing request never takes down the process
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from oilinfo.schemas.base import APIResponse

if TYPE_CHECKING:
    from fastapi import Request


class ErrorResponse(APIResponse):
    """Error envelope returned for every failed request."""

    message: str
    error: str
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All custom exceptions raised from request handlers should inherit from
    this class for consistent error responses.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error: str,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(message)


class DataUnavailableException(AppException):
    """A data endpoint could not produce its view."""

    def __init__(self, message: str, error: str) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            error=error,
        )


class ServiceUnavailableException(AppException):
    """A service required by the endpoint was not initialized."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message=message,
            error="SERVICE_UNAVAILABLE",
        )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _render(request: Request, status_code: int, message: str, error: str) -> ORJSONResponse:
    body = ErrorResponse(
        message=message,
        error=error,
        request_id=_get_request_id(request),
    )
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        return _render(request, exc.status_code, exc.message, exc.error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return _render(request, exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        fields = ", ".join(
            ".".join(str(loc) for loc in error["loc"]) for error in exc.errors()
        )
        return _render(
            request,
            422,
            "Request validation failed",
            fields or "VALIDATION_ERROR",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        from oilinfo.observability.logging import get_logger

        logger = get_logger(__name__)
        logger.opt(exception=exc).error("Unhandled exception")

        return _render(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            str(exc),
        )

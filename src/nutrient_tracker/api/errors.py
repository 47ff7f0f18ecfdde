"""API error types and handlers."""

import logging
from collections.abc import Callable
from typing import TypeVar

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrient_tracker.services.capture import InvalidImageError
from nutrient_tracker.services.intake import InvalidTimezoneError

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error rendered as a JSON ``{"error": ...}`` body."""

    def __init__(
        self, status_code: int, message: str, cause: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.cause = cause


def call_upstream(action: str, func: Callable[[], T]) -> T:
    """Run a store or service call, turning unexpected failures into 502s."""
    try:
        return func()
    except (ApiError, InvalidTimezoneError, InvalidImageError):
        raise
    except Exception as exc:
        _logger.exception("Failed to %s", action)
        raise ApiError(
            status.HTTP_502_BAD_GATEWAY, f"Failed to {action}", exc
        ) from exc


def register_error_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers for API and validation errors."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return _error_response(request, exc.status_code, exc.message, exc.cause)

    @app.exception_handler(InvalidTimezoneError)
    async def handle_timezone_error(
        request: Request, exc: InvalidTimezoneError
    ) -> JSONResponse:
        return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc), None)

    @app.exception_handler(InvalidImageError)
    async def handle_image_error(
        request: Request, exc: InvalidImageError
    ) -> JSONResponse:
        return _error_response(request, status.HTTP_400_BAD_REQUEST, str(exc), None)


def _error_response(
    request: Request, status_code: int, message: str, cause: Exception | None
) -> JSONResponse:
    """Return a JSON error body, with exception detail in local runs."""
    body: dict[str, str] = {"error": message}
    environment = request.app.state.container.settings.environment
    if cause is not None and environment == "local":
        detail = f"{type(cause).__name__}: {cause}".strip()
        if detail:
            body["details"] = detail
    return JSONResponse(status_code=status_code, content=body)

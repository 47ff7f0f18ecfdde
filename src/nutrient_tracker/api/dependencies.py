"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Depends, Header, Request, status

from nutrient_tracker.api.errors import ApiError
from nutrient_tracker.config import parse_api_token

if TYPE_CHECKING:
    from nutrient_tracker.containers import AppContainer


def _get_api_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return parse_api_token(container.settings.api_token)


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str | None = Depends(_get_api_token),
) -> None:
    """Ensure requests carry the configured API token, when one is set."""
    if api_token is None:
        return
    if not x_api_token or x_api_token != api_token:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Unauthorized")


def parse_owner_id(raw: str | None) -> UUID:
    """Parse a body user id, raising a 400 error when it is not a UUID."""
    if not raw:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Missing required fields")
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid user_id") from exc

"""Nutrient reference data endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from nutrient_tracker.api.errors import ApiError
from nutrient_tracker.api.serializers import nutrient_json

if TYPE_CHECKING:
    from nutrient_tracker.containers import AppContainer

router = APIRouter(prefix="/nutrients", tags=["nutrients"])


@router.get("")
async def list_nutrients(request: Request) -> dict[str, object]:
    """Return every tracked nutrient with its target and description."""
    container: AppContainer = request.app.state.container
    return {"nutrients": [nutrient_json(item) for item in container.catalog.values()]}


@router.get("/{name}")
async def get_nutrient(name: str, request: Request) -> dict[str, object]:
    """Return a single nutrient definition."""
    container: AppContainer = request.app.state.container
    definition = container.catalog.get(name)
    if definition is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Nutrient not found")
    return nutrient_json(definition)

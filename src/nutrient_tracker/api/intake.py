"""Per-user intake view and mutation endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from nutrient_tracker.api.dependencies import require_api_token
from nutrient_tracker.api.errors import ApiError, call_upstream
from nutrient_tracker.api.serializers import (
    daily_total_json,
    day_view_json,
    history_json,
    nutrient_detail_json,
    record_json,
)
from nutrient_tracker.services.intake import MAX_HISTORY_DAYS

if TYPE_CHECKING:
    from nutrient_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["intake"],
    dependencies=[Depends(require_api_token)],
)


@router.get("/today")
async def today(
    user_id: UUID, request: Request, tz: str | None = None
) -> dict[str, object]:
    """Return today's records, totals and clamped progress rows."""
    container: AppContainer = request.app.state.container
    view = call_upstream(
        "load today's intake",
        lambda: container.intake_service.get_today(user_id, _timezone(container, tz)),
    )
    return day_view_json(view)


@router.get("/days/{day}")
async def day_view(
    user_id: UUID, day: date, request: Request, tz: str | None = None
) -> dict[str, object]:
    """Return the view for a day selected by the client."""
    container: AppContainer = request.app.state.container
    view = call_upstream(
        "load intake for day",
        lambda: container.intake_service.get_day(
            user_id, _timezone(container, tz), day
        ),
    )
    return day_view_json(view)


@router.get("/history")
async def history(
    user_id: UUID, request: Request, tz: str | None = None, days: int | None = None
) -> dict[str, object]:
    """Return recent records grouped by day label."""
    container: AppContainer = request.app.state.container
    groups = call_upstream(
        "load intake history",
        lambda: container.intake_service.get_history(
            user_id, _timezone(container, tz), _days(container, days)
        ),
    )
    return {"days": history_json(groups)}


@router.get("/daily-totals")
async def daily_totals(
    user_id: UUID, request: Request, tz: str | None = None, days: int | None = None
) -> dict[str, object]:
    """Return per-day nutrient totals, most recent day first."""
    container: AppContainer = request.app.state.container
    totals = call_upstream(
        "load daily totals",
        lambda: container.intake_service.get_daily_totals(
            user_id, _timezone(container, tz), _days(container, days)
        ),
    )
    return {"days": [daily_total_json(total) for total in totals]}


@router.get("/nutrients/{name}")
async def nutrient_detail(
    user_id: UUID, name: str, request: Request, tz: str | None = None
) -> dict[str, object]:
    """Return today's amount and unclamped progress for one nutrient."""
    container: AppContainer = request.app.state.container
    detail = call_upstream(
        "load nutrient detail",
        lambda: container.intake_service.get_nutrient_detail(
            user_id, name, _timezone(container, tz)
        ),
    )
    if detail is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Nutrient not found")
    return nutrient_detail_json(detail)


@router.get("/records/{record_id}")
async def get_record(
    user_id: UUID, record_id: UUID, request: Request
) -> dict[str, object]:
    """Return a single intake record."""
    container: AppContainer = request.app.state.container
    record = call_upstream(
        "load record",
        lambda: container.intake_service.get_record(user_id, record_id),
    )
    if record is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Record not found")
    return record_json(record)


@router.post("/records/{record_id}/confirm")
async def confirm_record(
    user_id: UUID, record_id: UUID, request: Request, tz: str | None = None
) -> dict[str, object]:
    """Confirm a pending record and return the refreshed day."""
    container: AppContainer = request.app.state.container
    view = call_upstream(
        "confirm record",
        lambda: container.intake_service.confirm(
            user_id, record_id, _timezone(container, tz)
        ),
    )
    if view is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Record not found")
    return day_view_json(view)


@router.delete("/records/{record_id}")
async def delete_record(
    user_id: UUID, record_id: UUID, request: Request, tz: str | None = None
) -> dict[str, object]:
    """Delete a record and return the refreshed day."""
    container: AppContainer = request.app.state.container
    view = call_upstream(
        "delete record",
        lambda: container.intake_service.delete(
            user_id, record_id, _timezone(container, tz)
        ),
    )
    if view is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Record not found")
    return day_view_json(view)


def _timezone(container: AppContainer, tz: str | None) -> str:
    return tz or container.settings.default_timezone


def _days(container: AppContainer, days: int | None) -> int:
    if days is None or days < 1:
        return container.settings.history_days
    if days > MAX_HISTORY_DAYS:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid days")
    return days

"""Estimate-nutrient-content function endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from nutrient_tracker.api.dependencies import parse_owner_id, require_api_token
from nutrient_tracker.api.errors import ApiError
from nutrient_tracker.api.models import EstimateRequest
from nutrient_tracker.services.capture import InvalidImageError

if TYPE_CHECKING:
    from nutrient_tracker.containers import AppContainer

router = APIRouter(
    prefix="/functions/v1",
    tags=["functions"],
    dependencies=[Depends(require_api_token)],
)

_logger = logging.getLogger(__name__)


@router.post("/estimate-nutrient-content")
async def estimate_nutrient_content(
    body: EstimateRequest, request: Request
) -> dict[str, object]:
    """Estimate a photo's nutrients and log it as an unconfirmed record."""
    container: AppContainer = request.app.state.container
    owner_id = parse_owner_id(body.user_id)
    if not body.image_base64:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    try:
        result = await container.capture_service.capture(owner_id, body.image_base64)
    except InvalidImageError:
        raise
    except Exception as exc:
        _logger.exception(
            "Nutrient estimation failed", extra={"user_id": str(owner_id)}
        )
        raise ApiError(
            status.HTTP_502_BAD_GATEWAY, "Failed to process request", exc
        ) from exc

    record = result.record
    return {
        "record_id": str(record.id),
        "image_id": str(record.image_id) if record.image_id else None,
        "status": result.estimation.status,
        "estimates": result.estimation.estimates,
        "name": result.estimation.label,
        "message": "Nutrient content estimated and saved",
    }

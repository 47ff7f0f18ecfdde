"""Photo capture flow: estimate, store the image, log the intake."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from nutrient_tracker.domain.estimation import EstimationResult
from nutrient_tracker.domain.intake import IntakeRecord
from nutrient_tracker.services.estimation import EstimationService, detect_mime_type
from nutrient_tracker.services.intake import IntakeRepository

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")

_logger = logging.getLogger(__name__)


class InvalidImageError(ValueError):
    """Raised when an uploaded image payload cannot be decoded."""


class ImageStorage(Protocol):
    """Object storage for captured photos."""

    def upload_image(
        self, owner_id: UUID, image_id: UUID, content: bytes, content_type: str
    ) -> str:
        """Store image bytes and return the object path."""

    def delete_image(self, owner_id: UUID, image_id: UUID) -> None:
        """Remove a stored image."""


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of a capture: the stored record and the raw estimate."""

    record: IntakeRecord
    estimation: EstimationResult


@dataclass
class CaptureService:
    """Service that turns an uploaded photo into an unconfirmed record."""

    estimation_service: EstimationService
    storage: ImageStorage
    repository: IntakeRepository

    async def capture(self, owner_id: UUID, image_base64: str) -> CaptureResult:
        """Estimate nutrients for a photo, upload it and insert a record."""
        image_bytes = decode_image(image_base64)
        estimation = await self.estimation_service.estimate(image_bytes)
        if estimation.is_fallback:
            _logger.info("Storing fallback estimate for owner %s", owner_id)

        image_id = uuid4()
        self.storage.upload_image(
            owner_id, image_id, image_bytes, detect_mime_type(image_bytes)
        )
        try:
            record = self.repository.create_record(
                owner_id=owner_id,
                captured_at=datetime.now(tz=UTC),
                nutrient_breakdown=estimation.estimates,
                label=estimation.label,
                image_id=image_id,
            )
        except Exception:
            self._discard_image(owner_id, image_id)
            raise
        return CaptureResult(record=record, estimation=estimation)

    def _discard_image(self, owner_id: UUID, image_id: UUID) -> None:
        try:
            self.storage.delete_image(owner_id, image_id)
        except Exception:
            _logger.exception(
                "Failed to remove orphaned image", extra={"image_id": str(image_id)}
            )


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 image, accepting an optional data URL prefix.

    Whitespace such as MIME line breaks is ignored.
    """
    payload = _DATA_URL_PREFIX.sub("", image_base64.strip())
    payload = "".join(payload.split())
    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError("Image is not valid base64") from exc
    if not image_bytes:
        raise InvalidImageError("Image is empty")
    return image_bytes

"""Nutrient estimation from photos using LLM vision."""

import base64
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Protocol

from nutrient_tracker.domain.estimation import DEFAULT_LABEL, EstimationResult
from nutrient_tracker.domain.nutrients import DEFAULT_CATALOG, NutrientCatalog

_logger = logging.getLogger(__name__)


class VisionClient(Protocol):
    """Interface for LLM vision calls that reply with JSON text."""

    async def estimate(
        self,
        *,
        model: str,
        image_data_url: str,
        prompt: str,
        max_tokens: int,
    ) -> str | None:
        """Return the raw reply text for an image and prompt."""


class MalformedReplyError(ValueError):
    """Raised when a vision reply cannot be turned into estimates."""


@dataclass
class EstimationService:
    """Service that prompts for nutrient estimates and parses the reply."""

    client: VisionClient
    model: str
    max_tokens: int = 1000
    catalog: NutrientCatalog = field(default_factory=lambda: DEFAULT_CATALOG)

    async def estimate(self, image_bytes: bytes) -> EstimationResult:
        """Estimate nutrient content of an image.

        Client errors propagate. A reply that cannot be parsed yields the
        zeroed fallback result instead.
        """
        raw = await self.client.estimate(
            model=self.model,
            image_data_url=to_data_url(image_bytes),
            prompt=build_prompt(self.catalog),
            max_tokens=self.max_tokens,
        )
        try:
            return parse_reply(raw, self.catalog)
        except MalformedReplyError as exc:
            _logger.warning("Falling back to zero estimates: %s", exc)
            return EstimationResult.fallback(self.catalog.names())


def build_prompt(catalog: NutrientCatalog) -> str:
    """Build the estimation prompt listing every catalog nutrient."""
    lines = [
        "Based on this image, give the meal a short descriptive name and "
        "estimate the content of these nutrients. Return a JSON object with "
        "the name and estimated nutrient values:",
        "{",
        '  "name": "Example Meal Name",  // Short descriptive name of the meal',
    ]
    for definition in catalog.values():
        example = _format_number(definition.target / 10)
        lines.append(
            f'  "{definition.name}": {example},  // in {definition.unit}'
        )
    lines.append("}")
    return "\n".join(lines)


def parse_reply(raw: str | None, catalog: NutrientCatalog) -> EstimationResult:
    """Parse a JSON reply into estimates for every catalog nutrient."""
    if not raw:
        raise MalformedReplyError("empty reply")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedReplyError(f"invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedReplyError("reply is not a JSON object")

    estimates: dict[str, float] = {}
    for name in catalog.names():
        value = payload.get(name)
        if value is None:
            estimates[name] = 0.0
            continue
        if (
            isinstance(value, bool)
            or not isinstance(value, int | float)
            or not math.isfinite(value)
            or value < 0
        ):
            raise MalformedReplyError(f"invalid value for {name}: {value!r}")
        estimates[name] = float(value)

    name = payload.get("name")
    label = name.strip() if isinstance(name, str) and name.strip() else DEFAULT_LABEL
    return EstimationResult(status="estimated", label=label, estimates=estimates)


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def _format_number(value: float) -> str:
    return f"{value:g}"

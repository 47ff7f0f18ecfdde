"""Models for vision estimation results."""

from typing import Literal

from pydantic import BaseModel, Field

FALLBACK_LABEL = "Untitled Meal"
DEFAULT_LABEL = "Meal"


class EstimationResult(BaseModel):
    """Nutrient estimate for a photo, either parsed or a zeroed fallback."""

    status: Literal["estimated", "fallback"]
    label: str
    estimates: dict[str, float] = Field(default_factory=dict)

    @property
    def is_fallback(self) -> bool:
        """Return True when the model reply could not be used."""
        return self.status == "fallback"

    @classmethod
    def fallback(cls, nutrient_names: tuple[str, ...]) -> "EstimationResult":
        """Build the all-zero result used when a reply is unusable."""
        return cls(
            status="fallback",
            label=FALLBACK_LABEL,
            estimates=dict.fromkeys(nutrient_names, 0.0),
        )

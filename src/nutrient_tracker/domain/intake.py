"""Domain models for logged intake."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from nutrient_tracker.domain.nutrients import NutrientDefinition


@dataclass(frozen=True)
class IntakeRecord:
    """One logged photo with its estimated nutrient breakdown."""

    id: UUID
    owner_id: UUID
    captured_at: datetime
    nutrient_breakdown: dict[str, float]
    label: str = "Meal"
    confirmed: bool = False
    image_id: UUID | None = None


@dataclass(frozen=True)
class DailyTotal:
    """Summed nutrient amounts for one calendar day."""

    day: date
    totals: dict[str, float]


@dataclass(frozen=True)
class NutrientProgress:
    """Progress of a single nutrient against its daily target."""

    name: str
    purpose: str
    unit: str
    current: float
    target: float
    ratio: float

    @property
    def percent(self) -> float:
        """Return the ratio as a percentage rounded to one decimal."""
        return round(self.ratio * 100, 1)


@dataclass(frozen=True)
class NutrientDetail:
    """A nutrient's definition with the amount logged on one day."""

    definition: NutrientDefinition
    day: date
    amount: float
    ratio: float
    clamped_ratio: float

    @property
    def percent(self) -> float:
        """Return the unclamped ratio as a percentage."""
        return round(self.ratio * 100, 1)

    @property
    def over_target(self) -> bool:
        """Return True when the logged amount exceeds the target."""
        return self.ratio > 1.0


@dataclass(frozen=True)
class DayView:
    """Records, totals and progress rows for one day."""

    day: date
    label: str
    records: list[IntakeRecord]
    totals: DailyTotal
    progress: list[NutrientProgress]

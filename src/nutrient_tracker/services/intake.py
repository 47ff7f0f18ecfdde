"""Intake views: daily totals, history and record mutations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from typing import TYPE_CHECKING, Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nutrient_tracker.domain.intake import (
    DailyTotal,
    DayView,
    IntakeRecord,
    NutrientDetail,
    NutrientProgress,
)
from nutrient_tracker.domain.nutrients import DEFAULT_CATALOG, NutrientCatalog
from nutrient_tracker.services.aggregation import (
    daily_totals,
    day_label,
    group_by_day,
    local_day,
    progress,
    sum_nutrients,
)

if TYPE_CHECKING:
    from nutrient_tracker.services.capture import ImageStorage

_logger = logging.getLogger(__name__)

MAX_HISTORY_DAYS = 3650


class InvalidTimezoneError(ValueError):
    """Raised when a timezone name cannot be resolved."""


class IntakeRepository(Protocol):
    """Persistence interface for intake records."""

    def list_records(
        self,
        owner_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[IntakeRecord]:
        """Return an owner's records in [start, end), newest first."""

    def get_record(self, owner_id: UUID, record_id: UUID) -> IntakeRecord | None:
        """Return a record by id."""

    def create_record(
        self,
        owner_id: UUID,
        captured_at: datetime,
        nutrient_breakdown: dict[str, float],
        label: str,
        image_id: UUID | None,
    ) -> IntakeRecord:
        """Insert an unconfirmed record and return it."""

    def confirm_record(self, owner_id: UUID, record_id: UUID) -> IntakeRecord | None:
        """Mark a record as confirmed and return it."""

    def delete_record(self, owner_id: UUID, record_id: UUID) -> bool:
        """Delete a record, returning False when it did not exist."""


@dataclass
class IntakeService:
    """Service that fetches an owner's records and derives views from them.

    Nothing derived is cached: every call re-fetches and recomputes, so a
    view returned after a mutation always reflects the stored data.
    """

    repository: IntakeRepository
    storage: ImageStorage
    catalog: NutrientCatalog = field(default_factory=lambda: DEFAULT_CATALOG)

    def get_today(
        self, owner_id: UUID, timezone_name: str, now: datetime | None = None
    ) -> DayView:
        """Return today's view in the owner's timezone."""
        reference = _reference_now(timezone_name, now)
        return self._day_view(owner_id, reference.date(), reference)

    def get_day(
        self,
        owner_id: UUID,
        timezone_name: str,
        day: date,
        now: datetime | None = None,
    ) -> DayView:
        """Return the view for an explicitly selected day."""
        reference = _reference_now(timezone_name, now)
        return self._day_view(owner_id, day, reference)

    def get_history(
        self,
        owner_id: UUID,
        timezone_name: str,
        days: int = 30,
        now: datetime | None = None,
    ) -> dict[str, list[IntakeRecord]]:
        """Return records of the last ``days`` days grouped by day label."""
        reference = _reference_now(timezone_name, now)
        records = self._records_since(owner_id, reference, days)
        return group_by_day(records, reference, owner_id)

    def get_daily_totals(
        self,
        owner_id: UUID,
        timezone_name: str,
        days: int = 30,
        now: datetime | None = None,
    ) -> list[DailyTotal]:
        """Return per-day nutrient totals for days that have records."""
        reference = _reference_now(timezone_name, now)
        records = self._records_since(owner_id, reference, days)
        return daily_totals(records, reference, owner_id, self.catalog)

    def get_nutrient_detail(
        self,
        owner_id: UUID,
        name: str,
        timezone_name: str,
        now: datetime | None = None,
    ) -> NutrientDetail | None:
        """Return today's amount and progress for one nutrient."""
        definition = self.catalog.get(name)
        if definition is None:
            return None
        view = self.get_today(owner_id, timezone_name, now)
        amount = view.totals.totals.get(name, 0.0)
        return NutrientDetail(
            definition=definition,
            day=view.day,
            amount=amount,
            ratio=progress(amount, definition.target),
            clamped_ratio=progress(amount, definition.target, clamp=True),
        )

    def get_record(self, owner_id: UUID, record_id: UUID) -> IntakeRecord | None:
        """Return a single record."""
        record = self.repository.get_record(owner_id, record_id)
        if record is None or record.owner_id != owner_id:
            return None
        return record

    def confirm(
        self,
        owner_id: UUID,
        record_id: UUID,
        timezone_name: str,
        now: datetime | None = None,
    ) -> DayView | None:
        """Confirm a record and return the refreshed view of its day."""
        reference = _reference_now(timezone_name, now)
        record = self.repository.confirm_record(owner_id, record_id)
        if record is None:
            return None
        day = local_day(record.captured_at, reference)
        return self._day_view(owner_id, day, reference)

    def delete(
        self,
        owner_id: UUID,
        record_id: UUID,
        timezone_name: str,
        now: datetime | None = None,
    ) -> DayView | None:
        """Delete a record and return the refreshed view of its day."""
        reference = _reference_now(timezone_name, now)
        record = self.get_record(owner_id, record_id)
        if record is None:
            return None
        day = local_day(record.captured_at, reference)
        if not self.repository.delete_record(owner_id, record_id):
            return None
        if record.image_id is not None:
            try:
                self.storage.delete_image(owner_id, record.image_id)
            except Exception:
                _logger.exception(
                    "Failed to delete stored image",
                    extra={"image_id": str(record.image_id)},
                )
        return self._day_view(owner_id, day, reference)

    def _day_view(self, owner_id: UUID, day: date, reference: datetime) -> DayView:
        tz = reference.tzinfo or UTC
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
        fetched = self.repository.list_records(
            owner_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        records = [
            record
            for record in fetched
            if record.owner_id == owner_id
            and local_day(record.captured_at, reference) == day
        ]
        totals = DailyTotal(day=day, totals=sum_nutrients(records, self.catalog))
        return DayView(
            day=day,
            label=day_label(day, reference.date()),
            records=records,
            totals=totals,
            progress=self._progress_rows(totals),
        )

    def _progress_rows(self, totals: DailyTotal) -> list[NutrientProgress]:
        return [
            NutrientProgress(
                name=definition.name,
                purpose=definition.purpose,
                unit=definition.unit,
                current=totals.totals[definition.name],
                target=definition.target,
                ratio=progress(
                    totals.totals[definition.name], definition.target, clamp=True
                ),
            )
            for definition in self.catalog.values()
        ]

    def _records_since(
        self, owner_id: UUID, reference: datetime, days: int
    ) -> list[IntakeRecord]:
        tz = reference.tzinfo or UTC
        span = min(max(days, 1), MAX_HISTORY_DAYS)
        first_day = reference.date() - timedelta(days=span - 1)
        start = datetime.combine(first_day, time.min, tzinfo=tz)
        return self.repository.list_records(owner_id, start.astimezone(UTC), None)


def resolve_timezone(timezone_name: str) -> ZoneInfo:
    """Return the ZoneInfo for a name, raising InvalidTimezoneError."""
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {timezone_name}") from exc


def _reference_now(timezone_name: str, now: datetime | None) -> datetime:
    tz = resolve_timezone(timezone_name)
    if now is None:
        return datetime.now(tz=tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(tz)

"""Pure aggregation of intake records into daily totals and progress."""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from uuid import UUID

from nutrient_tracker.domain.intake import DailyTotal, IntakeRecord
from nutrient_tracker.domain.nutrients import DEFAULT_CATALOG, NutrientCatalog

TODAY_LABEL = "Today"
YESTERDAY_LABEL = "Yesterday"


def day_label(day: date, reference_day: date) -> str:
    """Return the display label for a day relative to the reference day."""
    if day == reference_day:
        return TODAY_LABEL
    if day == reference_day - timedelta(days=1):
        return YESTERDAY_LABEL
    label = f"{day:%b} {day.day}"
    if day.year != reference_day.year:
        label = f"{label}, {day.year}"
    return label


def local_day(captured_at: datetime, reference: datetime) -> date:
    """Return the calendar date of a timestamp in the reference timezone."""
    if reference.tzinfo is None or captured_at.tzinfo is None:
        return captured_at.date()
    return captured_at.astimezone(reference.tzinfo).date()


def group_by_day(
    records: Iterable[IntakeRecord], reference: datetime, owner_id: UUID
) -> dict[str, list[IntakeRecord]]:
    """Group an owner's records under day labels, most recent day first.

    Records keep the order they were supplied in within each day. Labels
    such as "Today" are derived from ``reference`` on every call.
    """
    by_day = _bucket_by_day(records, reference, owner_id)
    reference_day = reference.date()
    return {
        day_label(day, reference_day): by_day[day]
        for day in sorted(by_day, reverse=True)
    }


def sum_nutrients(
    records: Iterable[IntakeRecord], catalog: NutrientCatalog = DEFAULT_CATALOG
) -> dict[str, float]:
    """Sum nutrient amounts, with every catalog nutrient present."""
    totals = dict.fromkeys(catalog.names(), 0.0)
    for record in records:
        for name, amount in record.nutrient_breakdown.items():
            if name not in totals or not _is_finite_number(amount):
                continue
            totals[name] += float(amount)
    return totals


def progress(amount: float, target: float, *, clamp: bool = False) -> float:
    """Return amount / target, or 0.0 when the ratio is undefined."""
    if not _is_finite_number(amount) or not _is_finite_number(target):
        return 0.0
    if target <= 0:
        return 0.0
    ratio = amount / target
    if not math.isfinite(ratio):
        return 0.0
    if clamp:
        return max(0.0, min(ratio, 1.0))
    return ratio


def daily_totals(
    records: Iterable[IntakeRecord],
    reference: datetime,
    owner_id: UUID,
    catalog: NutrientCatalog = DEFAULT_CATALOG,
) -> list[DailyTotal]:
    """Return one DailyTotal per local day that has records, newest first."""
    by_day = _bucket_by_day(records, reference, owner_id)
    return [
        DailyTotal(day=day, totals=sum_nutrients(by_day[day], catalog))
        for day in sorted(by_day, reverse=True)
    ]


def _bucket_by_day(
    records: Iterable[IntakeRecord], reference: datetime, owner_id: UUID
) -> dict[date, list[IntakeRecord]]:
    by_day: dict[date, list[IntakeRecord]] = {}
    for record in records:
        if record.owner_id != owner_id:
            continue
        by_day.setdefault(local_day(record.captured_at, reference), []).append(
            record
        )
    return by_day


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)

"""JSON shapes for domain objects returned by the API."""

from nutrient_tracker.domain.intake import (
    DailyTotal,
    DayView,
    IntakeRecord,
    NutrientDetail,
    NutrientProgress,
)
from nutrient_tracker.domain.nutrients import NutrientDefinition


def nutrient_json(definition: NutrientDefinition) -> dict[str, object]:
    return {
        "name": definition.name,
        "target": definition.target,
        "unit": definition.unit,
        "purpose": definition.purpose,
        "sources": definition.sources,
        "recommendations": definition.recommendations,
    }


def record_json(record: IntakeRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "user_id": str(record.owner_id),
        "captured_at": record.captured_at.isoformat(),
        "label": record.label,
        "confirmed": record.confirmed,
        "image_id": str(record.image_id) if record.image_id else None,
        "nutrients": record.nutrient_breakdown,
    }


def daily_total_json(total: DailyTotal) -> dict[str, object]:
    return {"day": total.day.isoformat(), "totals": total.totals}


def progress_json(row: NutrientProgress) -> dict[str, object]:
    return {
        "name": row.name,
        "purpose": row.purpose,
        "unit": row.unit,
        "current": row.current,
        "target": row.target,
        "ratio": row.ratio,
        "percent": row.percent,
    }


def day_view_json(view: DayView) -> dict[str, object]:
    """Serialize a day view; the day key lets clients drop stale replies."""
    return {
        "day": view.day.isoformat(),
        "label": view.label,
        "records": [record_json(record) for record in view.records],
        "totals": view.totals.totals,
        "progress": [progress_json(row) for row in view.progress],
    }


def nutrient_detail_json(detail: NutrientDetail) -> dict[str, object]:
    return {
        "nutrient": nutrient_json(detail.definition),
        "day": detail.day.isoformat(),
        "amount": detail.amount,
        "ratio": detail.ratio,
        "clamped_ratio": detail.clamped_ratio,
        "percent": detail.percent,
        "over_target": detail.over_target,
    }


def history_json(groups: dict[str, list[IntakeRecord]]) -> list[dict[str, object]]:
    return [
        {"label": label, "records": [record_json(record) for record in records]}
        for label, records in groups.items()
    ]

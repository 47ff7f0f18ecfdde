"""Supabase repository for intake records."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrient_tracker.domain.estimation import DEFAULT_LABEL
from nutrient_tracker.domain.intake import IntakeRecord
from nutrient_tracker.services.intake import IntakeRepository

_COLUMNS = "id, user_id, image_id, created_at, nutrient_content, notes, confirmed"


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation backed by the meals table."""

    client: Client
    table_name: str = "meals"

    def list_records(
        self,
        owner_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[IntakeRecord]:
        """Return an owner's records in the time range, newest first."""
        query = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
        )
        if start is not None:
            query = query.gte("created_at", start.isoformat())
        if end is not None:
            query = query.lt("created_at", end.isoformat())
        response = query.order("created_at", desc=True).execute()
        records = (_parse_row(row) for row in response.data or [])
        return [record for record in records if record is not None]

    def get_record(self, owner_id: UUID, record_id: UUID) -> IntakeRecord | None:
        """Return a record by id."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", str(record_id))
            .eq("user_id", str(owner_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_record(
        self,
        owner_id: UUID,
        captured_at: datetime,
        nutrient_breakdown: dict[str, float],
        label: str,
        image_id: UUID | None,
    ) -> IntakeRecord:
        """Insert an unconfirmed record and return it."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "user_id": str(owner_id),
                    "image_id": str(image_id) if image_id else None,
                    "created_at": captured_at.isoformat(),
                    "nutrient_content": nutrient_breakdown,
                    "notes": label,
                    "confirmed": False,
                }
            )
            .execute()
        )
        record = _parse_row(response.data[0]) if response.data else None
        if record is None:
            raise RuntimeError("Failed to save meal data")
        return record

    def confirm_record(self, owner_id: UUID, record_id: UUID) -> IntakeRecord | None:
        """Set the confirmed flag on a record."""
        response = (
            self.client.table(self.table_name)
            .update({"confirmed": True})
            .eq("id", str(record_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_record(self, owner_id: UUID, record_id: UUID) -> bool:
        """Delete a record by id."""
        response = (
            self.client.table(self.table_name)
            .delete()
            .eq("id", str(record_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> IntakeRecord | None:
    created_at_raw = row.get("created_at")
    # Rows without a capture time cannot be placed on a day.
    if not isinstance(created_at_raw, str) or not created_at_raw:
        return None
    captured_at = datetime.fromisoformat(created_at_raw)
    if captured_at.tzinfo is None:
        captured_at = captured_at.replace(tzinfo=UTC)
    image_id = row.get("image_id")
    return IntakeRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        captured_at=captured_at,
        nutrient_breakdown=_parse_breakdown(row.get("nutrient_content")),
        label=str(row.get("notes") or DEFAULT_LABEL),
        confirmed=bool(row.get("confirmed", False)),
        image_id=UUID(str(image_id)) if image_id else None,
    )


def _parse_breakdown(raw: object) -> dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    breakdown: dict[str, float] = {}
    for name, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int | float):
            continue
        if not math.isfinite(value):
            continue
        breakdown[str(name)] = float(value)
    return breakdown

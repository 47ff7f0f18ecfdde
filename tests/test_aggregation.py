"""Tests for nutrient aggregation."""

import math
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutrient_tracker.domain.nutrients import DEFAULT_CATALOG
from nutrient_tracker.services.aggregation import (
    daily_totals,
    day_label,
    group_by_day,
    progress,
    sum_nutrients,
)
from tests.conftest import make_record


def test_sum_nutrients_returns_every_catalog_key() -> None:
    owner = uuid4()
    now = datetime(2024, 1, 17, 12, tzinfo=UTC)
    records = [
        make_record(owner, now, {"Omega-3": 1.2}),
        make_record(owner, now, {"Choline": 300}),
    ]

    totals = sum_nutrients(records)

    assert set(totals) == set(DEFAULT_CATALOG.names())
    assert all(value >= 0 for value in totals.values())
    assert totals["Creatine"] == 0.0


def test_sum_nutrients_empty_input_is_all_zero() -> None:
    totals = sum_nutrients([])

    assert totals == dict.fromkeys(DEFAULT_CATALOG.names(), 0.0)


def test_sum_nutrients_adds_same_day_omega3() -> None:
    owner = uuid4()
    now = datetime(2024, 1, 17, 12, tzinfo=UTC)
    records = [
        make_record(owner, now, {"Omega-3": 1.2}),
        make_record(owner, now - timedelta(hours=2), {"Omega-3": 0.8}),
    ]

    totals = sum_nutrients(records)

    assert math.isclose(totals["Omega-3"], 2.0)
    ratio = progress(totals["Omega-3"], DEFAULT_CATALOG.target("Omega-3"), clamp=True)
    assert math.isclose(ratio, 1.0)


def test_sum_nutrients_drops_unknown_keys() -> None:
    owner = uuid4()
    record = make_record(
        owner, datetime(2024, 1, 17, tzinfo=UTC), {"Foo": 99, "Omega-3": 1}
    )

    totals = sum_nutrients([record])

    assert "Foo" not in totals
    assert totals["Omega-3"] == 1


def test_sum_nutrients_skips_non_finite_values() -> None:
    owner = uuid4()
    record = make_record(
        owner,
        datetime(2024, 1, 17, tzinfo=UTC),
        {"Iron": float("nan"), "Zinc": float("inf"), "Selenium": 20},
    )

    totals = sum_nutrients([record])

    assert totals["Iron"] == 0.0
    assert totals["Zinc"] == 0.0
    assert totals["Selenium"] == 20


def test_sum_nutrients_is_idempotent() -> None:
    owner = uuid4()
    records = [make_record(owner, datetime(2024, 1, 17, tzinfo=UTC), {"Zinc": 5})]

    assert sum_nutrients(records) == sum_nutrients(records)


def test_group_by_day_single_day_yields_one_group() -> None:
    owner = uuid4()
    reference = datetime(2024, 1, 17, 20, tzinfo=UTC)
    records = [
        make_record(owner, datetime(2024, 1, 15, 9, tzinfo=UTC)),
        make_record(owner, datetime(2024, 1, 15, 18, tzinfo=UTC)),
    ]

    groups = group_by_day(records, reference, owner)

    assert list(groups) == ["Jan 15"]
    assert groups["Jan 15"] == records


def test_group_by_day_midnight_and_end_of_day_share_label() -> None:
    owner = uuid4()
    reference = datetime(2024, 1, 17, 12, tzinfo=UTC)
    first = make_record(owner, datetime(2024, 1, 17, 0, 0, 0, tzinfo=UTC))
    last = make_record(owner, datetime(2024, 1, 17, 23, 59, 59, tzinfo=UTC))

    groups = group_by_day([last, first], reference, owner)

    assert groups == {"Today": [last, first]}


def test_group_by_day_orders_days_newest_first() -> None:
    owner = uuid4()
    reference = datetime(2024, 1, 17, 12, tzinfo=UTC)
    older = make_record(owner, datetime(2024, 1, 15, 9, tzinfo=UTC))
    yesterday = make_record(owner, datetime(2024, 1, 16, 9, tzinfo=UTC))
    today = make_record(owner, datetime(2024, 1, 17, 9, tzinfo=UTC))

    groups = group_by_day([older, today, yesterday], reference, owner)

    assert list(groups) == ["Today", "Yesterday", "Jan 15"]


def test_group_by_day_excludes_other_owners() -> None:
    owner = uuid4()
    reference = datetime(2024, 1, 17, 12, tzinfo=UTC)
    mine = make_record(owner, reference)
    theirs = make_record(uuid4(), reference)

    groups = group_by_day([mine, theirs], reference, owner)

    assert groups == {"Today": [mine]}


def test_group_by_day_empty_input() -> None:
    assert group_by_day([], datetime(2024, 1, 17, tzinfo=UTC), uuid4()) == {}


def test_group_by_day_uses_reference_timezone() -> None:
    owner = uuid4()
    tz = ZoneInfo("America/Los_Angeles")
    reference = datetime(2024, 1, 17, 12, tzinfo=tz)
    # 2024-01-17 05:00 UTC is still Jan 16 in Los Angeles.
    record = make_record(owner, datetime(2024, 1, 17, 5, tzinfo=UTC))

    groups = group_by_day([record], reference, owner)

    assert list(groups) == ["Yesterday"]


def test_group_by_day_labels_follow_reference_date() -> None:
    owner = uuid4()
    record = make_record(owner, datetime(2024, 1, 17, 23, tzinfo=UTC))

    before_midnight = group_by_day(
        [record], datetime(2024, 1, 17, 23, 30, tzinfo=UTC), owner
    )
    after_midnight = group_by_day(
        [record], datetime(2024, 1, 18, 0, 30, tzinfo=UTC), owner
    )

    assert list(before_midnight) == ["Today"]
    assert list(after_midnight) == ["Yesterday"]


def test_day_label_includes_year_for_other_years() -> None:
    reference = date(2025, 1, 2)

    assert day_label(date(2025, 1, 2), reference) == "Today"
    assert day_label(date(2025, 1, 1), reference) == "Yesterday"
    assert day_label(date(2024, 12, 31), reference) == "Dec 31, 2024"
    assert day_label(date(2024, 1, 15), date(2024, 3, 1)) == "Jan 15"
    assert day_label(date(2024, 1, 15), reference) != day_label(
        date(2025, 1, 15), date(2025, 3, 1)
    )


def test_progress_handles_zero_target() -> None:
    assert progress(5, 0) == 0.0
    assert progress(5, -1) == 0.0
    assert progress(0, 500) == 0.0


def test_progress_handles_non_finite_values() -> None:
    assert progress(float("nan"), 2) == 0.0
    assert progress(float("inf"), 2) == 0.0
    assert progress(1, float("nan")) == 0.0


def test_progress_clamped_and_unclamped() -> None:
    assert progress(2.4, 2) == 1.2
    assert progress(2.4, 2, clamp=True) == 1.0
    assert progress(1, 2, clamp=True) == 0.5


def test_daily_totals_one_entry_per_day() -> None:
    owner = uuid4()
    reference = datetime(2024, 1, 17, 12, tzinfo=UTC)
    records = [
        make_record(owner, datetime(2024, 1, 17, 9, tzinfo=UTC), {"Omega-3": 1.2}),
        make_record(owner, datetime(2024, 1, 16, 9, tzinfo=UTC), {"Omega-3": 0.8}),
        make_record(owner, datetime(2024, 1, 16, 19, tzinfo=UTC), {"Omega-3": 0.7}),
    ]

    totals = daily_totals(records, reference, owner)

    assert [total.day for total in totals] == [date(2024, 1, 17), date(2024, 1, 16)]
    assert math.isclose(totals[1].totals["Omega-3"], 1.5)

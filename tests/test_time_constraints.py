"""Tests for study_planner.tools.time_constraints."""
from datetime import datetime, timedelta, timezone

import pytest

from study_planner.tools.time_constraints import (
    calculate_estimated_completion,
    calculate_time_constraints,
    days_between,
    parse_target_date,
)


def test_parse_target_date_accepts_z_suffix() -> None:
    parsed = parse_target_date("2025-02-01T10:00:00Z")
    assert parsed == datetime(2025, 2, 1, 10, tzinfo=timezone.utc)


def test_parse_target_date_treats_naive_as_utc() -> None:
    assert parse_target_date("2025-02-01") == datetime(2025, 2, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["", "next tuesday", "2025-13-01"])
def test_parse_target_date_rejects_garbage(value: str) -> None:
    with pytest.raises(ValueError):
        parse_target_date(value)


def test_days_between_rounds_partial_days_up(now: datetime) -> None:
    assert days_between(now, now + timedelta(hours=1)) == 1
    assert days_between(now, now + timedelta(days=2, hours=1)) == 3
    assert days_between(now, now + timedelta(days=30)) == 30


def test_days_between_past_dates_are_not_positive(now: datetime) -> None:
    assert days_between(now, now - timedelta(hours=1)) == 0
    assert days_between(now, now - timedelta(days=2)) == -2


def test_calculate_time_constraints(now: datetime) -> None:
    constraints = calculate_time_constraints(now + timedelta(days=30), 2, now=now)
    assert constraints.total_days == 30
    assert constraints.total_hours == 60
    assert constraints.daily_hours == 2
    assert constraints.weekly_hours == 14


def test_estimated_completion_rounds_days_up(now: datetime) -> None:
    assert calculate_estimated_completion(90, 2, now=now) == now + timedelta(days=45)
    assert calculate_estimated_completion(7, 2, now=now) == now + timedelta(days=4)

"""Convert a target date and daily budget into day/hour totals."""
from datetime import datetime, timedelta, timezone
import math
from typing import Optional

from study_planner.models.goal import TimeConstraints


SECONDS_PER_DAY = 24 * 60 * 60


def parse_target_date(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp or date into an aware datetime.

    Accepts a trailing 'Z'. Naive values (including date-only strings) are
    taken as UTC. Raises ValueError on anything else.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("targetDate must be a non-empty string")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    return ensure_aware(parsed)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up (negative if end is earlier)."""
    delta = ensure_aware(end) - ensure_aware(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def calculate_time_constraints(
    target_date: datetime,
    daily_hours: float,
    now: Optional[datetime] = None
) -> TimeConstraints:
    """
    Compute the study budget between now and target_date.

    total_days may be zero or negative; callers must stop before using it
    (the analysis pipeline raises NonPositiveTimeWindow).
    """
    now = now or utc_now()
    total_days = days_between(now, target_date)

    return TimeConstraints(
        total_days=total_days,
        total_hours=total_days * daily_hours,
        daily_hours=daily_hours,
        weekly_hours=daily_hours * 7,
    )


def calculate_estimated_completion(
    required_hours: float,
    daily_hours: float,
    now: Optional[datetime] = None
) -> datetime:
    """Date by which required_hours are done at daily_hours per day."""
    now = now or utc_now()
    days_needed = math.ceil(required_hours / daily_hours)
    return now + timedelta(days=days_needed)

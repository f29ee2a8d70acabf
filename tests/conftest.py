"""Shared fixtures: a fixed clock, a record store and a goal request builder."""
from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from study_planner.tools.plan_store import InMemoryRecordStore


NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def goal_request() -> Callable[..., dict]:
    """Build a camelCase goal request with a target `days` after NOW."""
    def _make(days: int = 60, **overrides) -> dict:
        request = {
            "userId": "user-1",
            "goalType": "interview",
            "subject": "Python",
            "targetDate": (NOW + timedelta(days=days)).isoformat(),
            "availableDailyHours": 3,
            "currentLevel": "intermediate",
        }
        request.update(overrides)
        return request
    return _make

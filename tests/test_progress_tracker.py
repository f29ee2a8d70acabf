"""Tests for study_planner.tools.progress_tracker."""
from datetime import datetime, timedelta

import pytest

from study_planner.errors import InvalidPlanState, NotFound
from study_planner.models.plan import StudyPlanRequest
from study_planner.models.progress import ProgressUpdate
from study_planner.tools.goal_analysis import analyze_and_store_goal
from study_planner.tools.plan_generator import generate_and_store_plan
from study_planner.tools.plan_store import get_study_plan
from study_planner.tools.progress_tracker import (
    get_plan_progress,
    record_topic_progress,
    update_plan_status,
)


@pytest.fixture
def plan(goal_request, store, now: datetime):
    goal = analyze_and_store_goal(goal_request(), store, now=now)
    return generate_and_store_plan(
        StudyPlanRequest(user_id="user-1", goal_id=goal.goal_id), store, now=now
    )


def _complete(store, plan, count: int, now: datetime) -> None:
    for topic_id in plan.topic_sequence[:count]:
        record_topic_progress(
            store, "user-1", plan.plan_id,
            ProgressUpdate(topic_id=topic_id, status="completed", hours_spent=4), now=now
        )


def test_progress_entries_accumulate(store, plan, now: datetime) -> None:
    topic = plan.topics[0]
    first = record_topic_progress(
        store, "user-1", plan.plan_id,
        ProgressUpdate(topic_id=topic.topic_id, status="in_progress", hours_spent=1.5, notes="started"),
        now=now,
    )
    assert first.topic_name == topic.name
    assert first.hours_allocated == 4
    assert first.completion_percentage == 50
    assert first.confidence == 3

    second = record_topic_progress(
        store, "user-1", plan.plan_id,
        ProgressUpdate(topic_id=topic.topic_id, status="completed", hours_spent=2, confidence=5),
        now=now + timedelta(days=1),
    )
    assert second.hours_spent == 3.5
    assert second.notes == ["started"]
    assert second.completion_percentage == 100
    assert second.confidence == 5
    assert second.last_updated == now + timedelta(days=1)


def test_unknown_topic_is_rejected(store, plan, now: datetime) -> None:
    with pytest.raises(NotFound, match="Topic not found: topic_nope"):
        record_topic_progress(
            store, "user-1", plan.plan_id,
            ProgressUpdate(topic_id="topic_nope", status="completed"), now=now
        )


def test_unknown_plan(store, now: datetime) -> None:
    with pytest.raises(NotFound, match="Study plan not found"):
        get_plan_progress(store, "user-1", "plan_missing", now=now)


def test_progress_at_start(store, plan, now: datetime) -> None:
    _complete(store, plan, 1, now)
    progress = get_plan_progress(store, "user-1", plan.plan_id, now=now)

    assert progress.total_topics == 12
    assert progress.completed_topics == 1
    assert progress.overall_progress == 8
    assert progress.total_hours_spent == 4
    assert progress.total_hours_allocated == pytest.approx(48)
    assert progress.current_day == 0
    assert progress.days_remaining == 60
    assert progress.on_track


def test_falling_behind_halfway(store, plan, now: datetime) -> None:
    halfway = now + timedelta(days=30)
    _complete(store, plan, 1, now)
    behind = get_plan_progress(store, "user-1", plan.plan_id, now=halfway)
    assert behind.current_day == 30
    assert behind.days_remaining == 30
    assert not behind.on_track

    _complete(store, plan, 6, now)
    caught_up = get_plan_progress(store, "user-1", plan.plan_id, now=halfway)
    assert caught_up.overall_progress == 50
    assert caught_up.on_track


def test_days_remaining_never_negative(store, plan, now: datetime) -> None:
    progress = get_plan_progress(store, "user-1", plan.plan_id, now=now + timedelta(days=75))
    assert progress.days_remaining == 0


def test_status_counts(store, plan, now: datetime) -> None:
    ids = plan.topic_sequence
    for topic_id, status in [(ids[0], "completed"), (ids[1], "in_progress"), (ids[2], "skipped")]:
        record_topic_progress(
            store, "user-1", plan.plan_id, ProgressUpdate(topic_id=topic_id, status=status), now=now
        )
    progress = get_plan_progress(store, "user-1", plan.plan_id, now=now)
    assert (progress.completed_topics, progress.in_progress_topics, progress.skipped_topics) == (1, 1, 1)
    assert len(progress.topic_progress) == 3


def test_pause_resume_complete(store, plan, now: datetime) -> None:
    later = now + timedelta(days=2)
    paused = update_plan_status(store, "user-1", plan.plan_id, "paused", now=later)
    assert paused.status == "paused"
    assert paused.last_modified == later
    assert get_study_plan(store, "user-1", plan.plan_id).status == "paused"

    assert update_plan_status(store, "user-1", plan.plan_id, "active", now=later).status == "active"
    assert update_plan_status(store, "user-1", plan.plan_id, "completed", now=later).status == "completed"

    with pytest.raises(InvalidPlanState):
        update_plan_status(store, "user-1", plan.plan_id, "active", now=later)


def test_same_status_is_a_no_op(store, plan, now: datetime) -> None:
    unchanged = update_plan_status(store, "user-1", plan.plan_id, "active", now=now)
    assert unchanged.last_modified is None

"""Tests for study_planner.tools.goal_analysis."""
from datetime import datetime, timedelta

import pytest

from study_planner.config import PlannerSettings
from study_planner.errors import InvalidGoalRequest, NonPositiveTimeWindow
from study_planner.tools.feasibility import calculate_feasibility_score
from study_planner.tools.goal_analysis import analyze_and_store_goal, analyze_goal
from study_planner.tools.plan_store import get_goal_analysis
from study_planner.tools.topic_catalog import InMemoryTopicCatalog


def test_beginner_javascript_exam_is_not_feasible(goal_request, now: datetime) -> None:
    request = goal_request(
        days=30, subject="javascript", goalType="exam",
        availableDailyHours=2, currentLevel="beginner"
    )
    result = analyze_goal(request, now=now)

    assert result.time_constraints.total_days == 30
    assert result.time_constraints.total_hours == 60
    assert result.topic_count == 15
    assert result.estimated_hours_per_topic == 6
    assert result.feasibility_score == 48
    assert not result.is_feasible
    assert len(result.alternatives) == 3
    assert result.estimated_completion_date == now + timedelta(days=45)


def test_half_hour_a_day_for_generic_subject(goal_request, now: datetime) -> None:
    request = goal_request(days=30, subject="Pottery", goalType="job", availableDailyHours=0.5)
    result = analyze_goal(request, catalog=InMemoryTopicCatalog(default_topic_count=10), now=now)

    assert result.topic_count == 10
    assert result.estimated_hours_per_topic == 4
    assert result.time_constraints.total_hours == 15
    assert result.feasibility_score == calculate_feasibility_score(15, 40, "intermediate")
    assert result.feasibility_score < 60
    assert not result.is_feasible
    assert result.recommendations[0] == "Your current timeline is not realistic for comprehensive preparation."


def test_feasible_goal_has_no_alternatives(goal_request, now: datetime) -> None:
    result = analyze_goal(goal_request(), now=now)

    assert result.topic_count == 12
    assert result.estimated_hours_per_topic == 4
    assert result.feasibility_score == 100
    assert result.is_feasible
    assert result.alternatives is None
    assert result.goal_id.startswith("goal_")
    assert result.created_at == now


def test_specific_topics_drive_the_count(goal_request, now: datetime) -> None:
    result = analyze_goal(goal_request(specificTopics=["Decorators", "Generators", "Asyncio"]), now=now)
    assert result.topic_count == 3
    assert result.specific_topics == ["Decorators", "Generators", "Asyncio"]


def test_threshold_comes_from_settings(goal_request, now: datetime) -> None:
    request = goal_request(
        days=30, subject="javascript", goalType="exam",
        availableDailyHours=2, currentLevel="beginner"
    )
    result = analyze_goal(request, settings=PlannerSettings(feasibility_threshold=40), now=now)
    assert result.feasibility_score == 48
    assert result.is_feasible
    assert result.alternatives is None


def test_invalid_request_lists_all_errors(goal_request, now: datetime) -> None:
    with pytest.raises(InvalidGoalRequest) as exc_info:
        analyze_goal(goal_request(userId="", availableDailyHours=30), now=now)

    assert exc_info.value.errors == [
        "userId is required",
        "availableDailyHours cannot exceed 24 hours",
    ]
    assert exc_info.value.to_dict()["code"] == "INVALID_GOAL_REQUEST"


def test_nan_daily_hours_is_an_invalid_request(goal_request, now: datetime) -> None:
    with pytest.raises(InvalidGoalRequest) as exc_info:
        analyze_goal(goal_request(availableDailyHours=float("nan")), now=now)

    assert exc_info.value.errors == ["availableDailyHours must be greater than 0"]


@pytest.mark.parametrize("days", [0, -3])
def test_target_date_must_be_in_the_future(goal_request, now: datetime, days: int) -> None:
    with pytest.raises(NonPositiveTimeWindow):
        analyze_goal(goal_request(days=days), now=now)


def test_analyze_and_store(goal_request, store, now: datetime) -> None:
    result = analyze_and_store_goal(goal_request(), store, now=now)
    assert get_goal_analysis(store, "user-1", result.goal_id) == result


def test_goal_ids_are_unique(goal_request, now: datetime) -> None:
    ids = {analyze_goal(goal_request(), now=now).goal_id for _ in range(5)}
    assert len(ids) == 5

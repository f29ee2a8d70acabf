"""Tests for study_planner.agents.tools (status-dict wrappers)."""
from datetime import date, timedelta
from pathlib import Path

import pytest

from study_planner.agents import tools


@pytest.fixture(autouse=True)
def state_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("STUDY_PLANNER_STATE_DIR", str(tmp_path))
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    return tmp_path


def _analyze(**overrides) -> dict:
    args = dict(
        user_id="user-1",
        goal_type="interview",
        subject="Python",
        target_date=(date.today() + timedelta(days=60)).isoformat(),
        available_daily_hours=3,
        current_level="intermediate",
    )
    args.update(overrides)
    return tools.analyze_study_goal(**args)


def test_get_current_date() -> None:
    result = tools.get_current_date()
    assert result["status"] == "success"
    assert result["today"] == date.today().isoformat()


def test_analyze_goal_persists_record(state_dir: Path) -> None:
    result = _analyze()

    assert result["status"] == "success"
    assert result["is_feasible"]
    assert result["analysis"]["goalId"] == result["goal_id"]
    assert (state_dir / "records" / "user-1" / f"{result['goal_id']}.json").exists()

    fetched = tools.get_goal_analysis_tool("user-1", result["goal_id"])
    assert fetched["status"] == "success"
    assert fetched["analysis"]["topicCount"] == 12


def test_analyze_goal_reports_validation_errors() -> None:
    result = _analyze(available_daily_hours=30, subject="")

    assert result["status"] == "error"
    assert result["code"] == "INVALID_GOAL_REQUEST"
    assert result["details"] == ["subject is required", "availableDailyHours cannot exceed 24 hours"]


def test_infeasible_goal_lists_alternatives() -> None:
    result = _analyze(
        subject="javascript", goal_type="exam", current_level="beginner",
        available_daily_hours=0.5
    )
    assert result["status"] == "success"
    assert not result["is_feasible"]
    assert len(result["alternatives"]) == 3
    assert "Best alternative" in result["message"]


def test_plan_and_progress_flow() -> None:
    goal = _analyze()
    plan = tools.generate_study_plan_tool("user-1", goal["goal_id"])
    assert plan["status"] == "success"
    assert plan["total_topics"] == 12

    day_one = tools.get_study_plan_tool("user-1", plan["plan_id"], day=1)
    assert day_one["status"] == "success"
    assert day_one["session"]["day"] == 1
    assert tools.get_study_plan_tool("user-1", plan["plan_id"], day=999)["status"] == "error"

    full = tools.get_study_plan_tool("user-1", plan["plan_id"])
    topic_id = full["plan"]["topicSequence"][0]

    logged = tools.update_topic_progress("user-1", plan["plan_id"], topic_id, "completed", hours_spent=4)
    assert logged["status"] == "success"
    assert logged["progress"]["completionPercentage"] == 100

    progress = tools.get_plan_progress_tool("user-1", plan["plan_id"])
    assert progress["status"] == "success"
    assert progress["overall_progress"] == 8

    assert tools.set_plan_status("user-1", plan["plan_id"], "completed")["plan_status"] == "completed"
    reopened = tools.set_plan_status("user-1", plan["plan_id"], "active")
    assert reopened["status"] == "error"
    assert reopened["code"] == "INVALID_PLAN_STATE"


def test_plan_from_syllabus(state_dir: Path) -> None:
    extracted = tools.extract_syllabus_topics_tool("cs201", "Week 1: Recursion\nWeek 2: Sorting\n")
    assert extracted["status"] == "success"
    assert extracted["method"] == "heuristic"
    assert Path(extracted["output_path"]).parent == state_dir / "syllabus_topics"

    goal = _analyze()
    plan = tools.generate_study_plan_tool("user-1", goal["goal_id"], syllabus_document_ids=["cs201"])
    assert plan["total_topics"] == 2


def test_errors_are_returned_not_raised() -> None:
    missing = tools.generate_study_plan_tool("user-1", "goal_missing")
    assert missing["status"] == "error"
    assert missing["code"] == "NOT_FOUND"

    assert tools.get_plan_progress_tool("user-1", "plan_missing")["code"] == "NOT_FOUND"

    goal = _analyze()
    plan = tools.generate_study_plan_tool("user-1", goal["goal_id"])
    bad = tools.update_topic_progress("user-1", plan["plan_id"], "topic_x", "completed", hours_spent=-1)
    assert bad["code"] == "INVALID_PROGRESS_UPDATE"

"""Tests for study_planner.config."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from study_planner.config import PlannerSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("STATE_DIR", "FEASIBILITY_THRESHOLD", "MIN_PLAN_DAYS", "HOURS_TOLERANCE",
                 "STRICT_PREREQUISITES", "MODEL"):
        monkeypatch.delenv(f"STUDY_PLANNER_{name}", raising=False)


def test_defaults() -> None:
    settings = PlannerSettings()
    assert settings.feasibility_threshold == 60
    assert settings.min_plan_days == 7
    assert settings.hours_tolerance == 1.2
    assert not settings.strict_prerequisites
    assert settings.state_dir.parts[-2:] == ("storage", "state")


def test_env_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("STUDY_PLANNER_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("STUDY_PLANNER_FEASIBILITY_THRESHOLD", "70")
    monkeypatch.setenv("STUDY_PLANNER_MIN_PLAN_DAYS", "3")
    monkeypatch.setenv("STUDY_PLANNER_HOURS_TOLERANCE", "1.5")
    monkeypatch.setenv("STUDY_PLANNER_STRICT_PREREQUISITES", "yes")
    monkeypatch.setenv("STUDY_PLANNER_MODEL", "gemini-test")

    settings = PlannerSettings()
    assert settings.records_dir == tmp_path / "records"
    assert settings.syllabus_topics_dir == tmp_path / "syllabus_topics"
    assert settings.feasibility_threshold == 70
    assert settings.min_plan_days == 3
    assert settings.hours_tolerance == 1.5
    assert settings.strict_prerequisites
    assert settings.model == "gemini-test"


@pytest.mark.parametrize("name,value", [
    ("STUDY_PLANNER_FEASIBILITY_THRESHOLD", "150"),
    ("STUDY_PLANNER_MIN_PLAN_DAYS", "seven"),
])
def test_bad_values_are_validation_errors(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        PlannerSettings()


def test_explicit_values_win_over_env(monkeypatch) -> None:
    monkeypatch.setenv("STUDY_PLANNER_FEASIBILITY_THRESHOLD", "70")
    assert PlannerSettings(feasibility_threshold=40).feasibility_threshold == 40

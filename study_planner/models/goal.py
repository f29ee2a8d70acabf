"""Study goal and goal analysis models."""
from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import ConfigDict, Field, field_validator

from study_planner.models.base import PlannerModel


GoalType = Literal["exam", "interview", "job", "project"]
SkillLevel = Literal["beginner", "intermediate", "advanced"]

GOAL_TYPES: tuple[str, ...] = get_args(GoalType)
SKILL_LEVELS: tuple[str, ...] = get_args(SkillLevel)


class StudyGoal(PlannerModel):
    """A validated learning goal. Frozen once submitted."""
    model_config = ConfigDict(frozen=True)

    user_id: str
    goal_type: GoalType
    subject: str
    target_date: datetime
    available_daily_hours: float = Field(gt=0, le=24)
    current_level: SkillLevel
    specific_topics: Optional[list[str]] = None

    @field_validator("subject")
    @classmethod
    def strip_subject(cls, v: str) -> str:
        """Reject blank subjects."""
        v = v.strip()
        if not v:
            raise ValueError("subject must not be empty")
        return v


class GoalValidationResult(PlannerModel):
    """Outcome of batch request validation."""
    valid: bool
    errors: list[str] = Field(default_factory=list)


class TimeConstraints(PlannerModel):
    """Day/hour budget derived from the target date."""
    total_days: int
    total_hours: float
    daily_hours: float
    weekly_hours: float


class AlternativeTimeline(PlannerModel):
    """Re-parameterized version of an infeasible goal."""
    description: str
    adjusted_target_date: datetime
    adjusted_daily_hours: float
    adjusted_total_days: int
    feasibility_score: int = Field(ge=0, le=100)
    reasoning: str


class GoalAnalysisResult(PlannerModel):
    """Feasibility assessment of a goal; referenced later by goal_id."""
    model_config = ConfigDict(frozen=True)

    goal_id: str
    user_id: str
    goal_type: GoalType
    subject: str
    target_date: datetime
    available_daily_hours: float
    current_level: SkillLevel
    specific_topics: Optional[list[str]] = None

    time_constraints: TimeConstraints
    feasibility_score: int = Field(ge=0, le=100)
    is_feasible: bool
    estimated_completion_date: datetime
    recommendations: list[str] = Field(default_factory=list)
    alternatives: Optional[list[AlternativeTimeline]] = None
    topic_count: int
    estimated_hours_per_topic: float

    created_at: datetime

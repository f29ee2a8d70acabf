"""Study plan models."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import ConfigDict, Field

from study_planner.models.base import PlannerModel
from study_planner.models.topic import Topic


PlanStatus = Literal["active", "completed", "paused"]
CheckpointType = Literal["review", "assessment"]


class StudyPlanRequest(PlannerModel):
    """Plan generation input, tied to a stored goal analysis."""
    user_id: str = Field(min_length=1)
    goal_id: str = Field(min_length=1)
    syllabus_document_ids: Optional[list[str]] = None
    custom_topics: Optional[list[str]] = None


class SessionTopic(PlannerModel):
    """Hours of one topic scheduled on one day."""
    topic_id: str
    topic_name: str
    allocated_hours: float
    activities: list[str] = Field(default_factory=list)
    learning_objectives: list[str] = Field(default_factory=list)


class DailySession(PlannerModel):
    """One day of the schedule."""
    day: int  # 1-indexed
    date: str  # YYYY-MM-DD
    topics: list[SessionTopic] = Field(default_factory=list)
    total_hours: float = 0.0
    focus_area: str
    goals: list[str] = Field(default_factory=list)


class Milestone(PlannerModel):
    """Checkpoint summarizing cumulative topic coverage."""
    day: int
    description: str
    topics: list[str] = Field(default_factory=list)
    checkpoint_type: CheckpointType


class PlanFeasibility(PlannerModel):
    """Result of the plan-level gate run before allocation."""
    is_feasible: bool
    reason: Optional[str] = None
    suggestions: list[str] = Field(default_factory=list)


class StudyPlan(PlannerModel):
    """Day-by-day schedule generated from a goal analysis."""
    model_config = ConfigDict(frozen=True)

    plan_id: str
    user_id: str
    goal_id: str
    daily_sessions: list[DailySession] = Field(default_factory=list)
    total_duration: int
    estimated_completion: datetime
    topic_sequence: list[str] = Field(default_factory=list)  # topic ids
    topics: list[Topic] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    status: PlanStatus = "active"

    created_at: datetime
    last_modified: Optional[datetime] = None

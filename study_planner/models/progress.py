"""Progress tracking models for active study plans."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from study_planner.models.base import PlannerModel


TopicStatus = Literal["not_started", "in_progress", "completed", "skipped"]


class ProgressUpdate(PlannerModel):
    """A single study log entry for one topic of a plan."""
    topic_id: str
    status: TopicStatus
    hours_spent: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None
    confidence: Optional[int] = Field(default=None, ge=1, le=5)


class TopicProgress(PlannerModel):
    """Accumulated progress for one topic."""
    topic_id: str
    topic_name: str
    status: TopicStatus = "not_started"
    hours_spent: float = 0.0
    hours_allocated: float = 0.0
    completion_percentage: int = 0
    notes: list[str] = Field(default_factory=list)
    confidence: int = Field(default=3, ge=1, le=5)
    last_updated: datetime


class PlanProgress(PlannerModel):
    """Roll-up of topic progress against the plan timeline."""
    plan_id: str
    user_id: str
    total_topics: int
    completed_topics: int = 0
    in_progress_topics: int = 0
    skipped_topics: int = 0
    total_hours_spent: float = 0.0
    total_hours_allocated: float = 0.0
    overall_progress: int = Field(default=0, ge=0, le=100)
    current_day: int = 0
    days_remaining: int = 0
    on_track: bool = True
    topic_progress: list[TopicProgress] = Field(default_factory=list)
    last_updated: datetime

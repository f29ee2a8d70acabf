"""Topic models for the subject catalog and generated plans."""
from typing import Literal
import hashlib

from pydantic import Field

from study_planner.models.base import PlannerModel


Difficulty = Literal["easy", "medium", "hard"]


class TopicTemplate(PlannerModel):
    """Catalog entry for a known subject; becomes a Topic once hours are known."""
    name: str
    description: str
    priority: int = Field(ge=1, le=5)
    prerequisites: list[str] = Field(default_factory=list)  # topic names
    difficulty: Difficulty
    category: str


class Topic(PlannerModel):
    """Atomic unit of study content."""
    topic_id: str
    name: str
    description: str
    priority: int = Field(default=3, ge=1, le=5)  # 5 = highest
    estimated_hours: float = Field(gt=0)
    prerequisites: list[str] = Field(default_factory=list)  # topic names, not ids
    difficulty: Difficulty = "medium"
    category: str = "general"

    @staticmethod
    def generate_topic_id(subject: str, name: str, index: int) -> str:
        """Generate deterministic topic ID from subject, name and position."""
        unique_str = f"{subject.lower()}:{index}:{name}"
        return "topic_" + hashlib.sha1(unique_str.encode()).hexdigest()[:12]

"""Topic names extracted from a syllabus document."""
from typing import Literal

from pydantic import Field, field_validator

from study_planner.models.base import PlannerModel


class SyllabusTopics(PlannerModel):
    """Ordered topic names found in one syllabus."""
    document_id: str
    topics: list[str] = Field(default_factory=list)
    method: Literal["llm", "heuristic"] = "heuristic"
    generated_at: str  # ISO timestamp

    @field_validator("topics")
    @classmethod
    def dedupe_topics(cls, v: list[str]) -> list[str]:
        """Strip names, drop blanks and repeats, keep first-seen order."""
        seen = set()
        cleaned = []
        for name in v:
            name = name.strip()
            if name and name.lower() not in seen:
                seen.add(name.lower())
                cleaned.append(name)
        return cleaned

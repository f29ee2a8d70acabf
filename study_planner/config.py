"""Planner settings, read from STUDY_PLANNER_* environment variables (.env via python-dotenv)."""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).parent.parent


class PlannerSettings(BaseSettings):
    """Tunable thresholds and locations; injected into the pipelines.

    Unset variables keep the defaults. Call ``load_dotenv()`` first to pick
    up a ``.env`` file.
    """
    model_config = SettingsConfigDict(env_prefix="STUDY_PLANNER_", extra="ignore")

    state_dir: Path = Field(default=PROJECT_ROOT / "storage" / "state")
    feasibility_threshold: int = Field(default=60, ge=0, le=100)
    min_plan_days: int = Field(default=7, ge=1)
    hours_tolerance: float = Field(default=1.2, gt=0)  # allowed overrun of available hours
    strict_prerequisites: bool = False
    model: str = "gemini-2.5-flash"

    @property
    def records_dir(self) -> Path:
        return self.state_dir / "records"

    @property
    def syllabus_topics_dir(self) -> Path:
        return self.state_dir / "syllabus_topics"

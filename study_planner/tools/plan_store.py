"""Record store for goal analyses, study plans and topic progress.

Records are JSON dicts keyed by (user_id, record_id). The engine only needs
get/put plus a prefix listing for progress records.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote, unquote

from pydantic import ValidationError

from study_planner.errors import InternalError, NotFound
from study_planner.models.goal import GoalAnalysisResult
from study_planner.models.plan import StudyPlan
from study_planner.models.progress import TopicProgress

logger = logging.getLogger(__name__)

GOAL_ANALYSIS = "goal_analysis"
STUDY_PLAN = "study_plan"
TOPIC_PROGRESS = "topic_progress"


class RecordStore(Protocol):
    """Opaque key-value store keyed by (user_id, record_id)."""

    def get(self, user_id: str, record_id: str) -> Optional[dict]: ...

    def put(self, user_id: str, record_id: str, record: dict) -> None: ...

    def list_records(self, user_id: str, prefix: str = "") -> list[dict]: ...


class InMemoryRecordStore:
    """Dict-backed store for tests and single-process use."""

    def __init__(self):
        self._records: dict[tuple[str, str], str] = {}

    def get(self, user_id: str, record_id: str) -> Optional[dict]:
        raw = self._records.get((user_id, record_id))
        return json.loads(raw) if raw is not None else None

    def put(self, user_id: str, record_id: str, record: dict) -> None:
        # Stored serialized so callers never share mutable state with the store
        self._records[(user_id, record_id)] = json.dumps(record)

    def list_records(self, user_id: str, prefix: str = "") -> list[dict]:
        return [
            json.loads(raw)
            for (uid, record_id), raw in sorted(self._records.items())
            if uid == user_id and record_id.startswith(prefix)
        ]


class JsonFileRecordStore:
    """One JSON file per record under root/<user_id>/<record_id>.json."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _user_dir(self, user_id: str) -> Path:
        return self.root / quote(user_id, safe="")

    def _record_path(self, user_id: str, record_id: str) -> Path:
        return self._user_dir(user_id) / f"{quote(record_id, safe='')}.json"

    def get(self, user_id: str, record_id: str) -> Optional[dict]:
        path = self._record_path(user_id, record_id)
        if not path.exists():
            return None
        return self._read(path)

    def put(self, user_id: str, record_id: str, record: dict) -> None:
        """Write atomically (temp file then replace)."""
        path = self._record_path(user_id, record_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(record, indent=2))
            temp_path.replace(path)
        except OSError as e:
            raise InternalError(f"Failed to write record {record_id}: {e}") from e

    def list_records(self, user_id: str, prefix: str = "") -> list[dict]:
        user_dir = self._user_dir(user_id)
        if not user_dir.is_dir():
            return []
        records = []
        for path in sorted(user_dir.glob("*.json")):
            if unquote(path.stem).startswith(prefix):
                records.append(self._read(path))
        return records

    def _read(self, path: Path) -> dict:
        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise InternalError(f"Failed to read record {path.name}: {e}") from e


def progress_record_id(plan_id: str, topic_id: str) -> str:
    return f"{plan_id}.{topic_id}"


def _load(store: RecordStore, user_id: str, record_id: str, record_type: str) -> Optional[dict]:
    record = store.get(user_id, record_id)
    if record is None or record.get("recordType") != record_type:
        return None
    return record


def _tagged(record_type: str, payload: dict) -> dict:
    return {"recordType": record_type, **payload}


def save_goal_analysis(store: RecordStore, result: GoalAnalysisResult) -> None:
    store.put(result.user_id, result.goal_id, _tagged(GOAL_ANALYSIS, result.to_json_dict()))
    logger.info("Saved goal analysis %s for user %s", result.goal_id, result.user_id)


def get_goal_analysis(store: RecordStore, user_id: str, goal_id: str) -> GoalAnalysisResult:
    """Load a stored goal analysis; raises NotFound if absent."""
    record = _load(store, user_id, goal_id, GOAL_ANALYSIS)
    if record is None:
        raise NotFound("Goal analysis", goal_id)
    try:
        return GoalAnalysisResult.model_validate(record)
    except ValidationError as e:
        raise InternalError(f"Stored goal analysis {goal_id} is invalid: {e}") from e


def save_study_plan(store: RecordStore, plan: StudyPlan) -> None:
    store.put(plan.user_id, plan.plan_id, _tagged(STUDY_PLAN, plan.to_json_dict()))
    logger.info("Saved study plan %s for user %s", plan.plan_id, plan.user_id)


def get_study_plan(store: RecordStore, user_id: str, plan_id: str) -> StudyPlan:
    """Load a stored study plan; raises NotFound if absent."""
    record = _load(store, user_id, plan_id, STUDY_PLAN)
    if record is None:
        raise NotFound("Study plan", plan_id)
    try:
        return StudyPlan.model_validate(record)
    except ValidationError as e:
        raise InternalError(f"Stored study plan {plan_id} is invalid: {e}") from e


def save_topic_progress(
    store: RecordStore,
    user_id: str,
    plan_id: str,
    progress: TopicProgress
) -> None:
    record_id = progress_record_id(plan_id, progress.topic_id)
    store.put(user_id, record_id, _tagged(TOPIC_PROGRESS, progress.to_json_dict()))


def get_topic_progress(
    store: RecordStore,
    user_id: str,
    plan_id: str,
    topic_id: str
) -> Optional[TopicProgress]:
    record = _load(store, user_id, progress_record_id(plan_id, topic_id), TOPIC_PROGRESS)
    return TopicProgress.model_validate(record) if record is not None else None


def list_topic_progress(store: RecordStore, user_id: str, plan_id: str) -> list[TopicProgress]:
    """All progress records stored for a plan."""
    return [
        TopicProgress.model_validate(record)
        for record in store.list_records(user_id, prefix=progress_record_id(plan_id, ""))
        if record.get("recordType") == TOPIC_PROGRESS
    ]

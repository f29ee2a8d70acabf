"""Progress tracking and status changes for generated plans."""
from datetime import datetime
import logging
from typing import Optional

from study_planner.errors import InvalidPlanState, NotFound
from study_planner.models.plan import PlanStatus, StudyPlan
from study_planner.models.progress import PlanProgress, ProgressUpdate, TopicProgress
from study_planner.tools.feasibility import round_half_up
from study_planner.tools.plan_store import (
    RecordStore,
    get_study_plan,
    get_topic_progress,
    list_topic_progress,
    save_study_plan,
    save_topic_progress,
)
from study_planner.tools.time_constraints import days_between, utc_now

logger = logging.getLogger(__name__)

COMPLETION_BY_STATUS = {"completed": 100, "in_progress": 50}

# current status -> statuses it may move to
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "active": {"paused", "completed"},
    "paused": {"active", "completed"},
    "completed": set(),
}


def allocated_hours_by_topic(plan: StudyPlan) -> dict[str, float]:
    """Total scheduled hours per topic id."""
    totals: dict[str, float] = {}
    for session in plan.daily_sessions:
        for session_topic in session.topics:
            totals[session_topic.topic_id] = totals.get(session_topic.topic_id, 0.0) + session_topic.allocated_hours
    return totals


def _topic_names(plan: StudyPlan) -> dict[str, str]:
    names = {topic.topic_id: topic.name for topic in plan.topics}
    for session in plan.daily_sessions:
        for session_topic in session.topics:
            names.setdefault(session_topic.topic_id, session_topic.topic_name)
    return names


def apply_progress_update(
    existing: Optional[TopicProgress],
    update: ProgressUpdate,
    topic_name: str,
    hours_allocated: float,
    now: datetime
) -> TopicProgress:
    """Merge a log entry into a topic's progress: hours add up, notes append."""
    notes = list(existing.notes) if existing else []
    if update.notes:
        notes.append(update.notes)

    confidence = update.confidence or (existing.confidence if existing else 3)
    hours_spent = (existing.hours_spent if existing else 0.0) + update.hours_spent

    return TopicProgress(
        topic_id=update.topic_id,
        topic_name=topic_name,
        status=update.status,
        hours_spent=hours_spent,
        hours_allocated=hours_allocated,
        completion_percentage=COMPLETION_BY_STATUS.get(update.status, 0),
        notes=notes,
        confidence=confidence,
        last_updated=now,
    )


def record_topic_progress(
    store: RecordStore,
    user_id: str,
    plan_id: str,
    update: ProgressUpdate,
    now: Optional[datetime] = None
) -> TopicProgress:
    """
    Log study progress for one topic of a stored plan.

    Raises:
        NotFound: the plan does not exist or does not contain the topic
    """
    now = now or utc_now()
    plan = get_study_plan(store, user_id, plan_id)
    if update.topic_id not in plan.topic_sequence:
        raise NotFound("Topic", update.topic_id)

    existing = get_topic_progress(store, user_id, plan_id, update.topic_id)
    progress = apply_progress_update(
        existing,
        update,
        topic_name=_topic_names(plan).get(update.topic_id, "Unknown"),
        hours_allocated=allocated_hours_by_topic(plan).get(update.topic_id, 0.0),
        now=now,
    )
    save_topic_progress(store, user_id, plan_id, progress)
    logger.info(
        "Progress for %s/%s: %s, %.1fh spent",
        plan_id, update.topic_id, progress.status, progress.hours_spent
    )
    return progress


def calculate_plan_progress(
    plan: StudyPlan,
    progress_records: list[TopicProgress],
    now: Optional[datetime] = None
) -> PlanProgress:
    """
    Roll topic progress up against the plan timeline.

    overall_progress is the share of completed topics. The plan is on track
    while that share is at least 90% of the elapsed share of the timeline.
    """
    now = now or utc_now()
    completed = sum(1 for p in progress_records if p.status == "completed")
    in_progress = sum(1 for p in progress_records if p.status == "in_progress")
    skipped = sum(1 for p in progress_records if p.status == "skipped")
    total_hours_spent = sum(p.hours_spent for p in progress_records)

    total_topics = len(plan.topic_sequence)
    overall_progress = round_half_up(completed / total_topics * 100) if total_topics > 0 else 0

    days_remaining = days_between(now, plan.estimated_completion)
    current_day = plan.total_duration - days_remaining

    expected_progress = (current_day / plan.total_duration) * 100 if current_day > 0 and plan.total_duration > 0 else 0
    on_track = overall_progress >= expected_progress * 0.9

    return PlanProgress(
        plan_id=plan.plan_id,
        user_id=plan.user_id,
        total_topics=total_topics,
        completed_topics=completed,
        in_progress_topics=in_progress,
        skipped_topics=skipped,
        total_hours_spent=total_hours_spent,
        total_hours_allocated=sum(session.total_hours for session in plan.daily_sessions),
        overall_progress=min(overall_progress, 100),
        current_day=max(0, current_day),
        days_remaining=max(0, days_remaining),
        on_track=on_track,
        topic_progress=progress_records,
        last_updated=now,
    )


def get_plan_progress(
    store: RecordStore,
    user_id: str,
    plan_id: str,
    now: Optional[datetime] = None
) -> PlanProgress:
    """Load a plan and its topic progress and roll them up."""
    plan = get_study_plan(store, user_id, plan_id)
    records = list_topic_progress(store, user_id, plan_id)
    return calculate_plan_progress(plan, records, now=now)


def update_plan_status(
    store: RecordStore,
    user_id: str,
    plan_id: str,
    status: PlanStatus,
    now: Optional[datetime] = None
) -> StudyPlan:
    """
    Pause, resume or complete a plan.

    Returns the updated copy; the stored record is replaced.

    Raises:
        NotFound: plan does not exist
        InvalidPlanState: transition not allowed (completed is final)
    """
    now = now or utc_now()
    plan = get_study_plan(store, user_id, plan_id)
    if status == plan.status:
        return plan
    if status not in ALLOWED_TRANSITIONS.get(plan.status, set()):
        raise InvalidPlanState(plan.status, status)

    updated = plan.model_copy(update={"status": status, "last_modified": now})
    save_study_plan(store, updated)
    logger.info("Plan %s status: %s -> %s", plan_id, plan.status, status)
    return updated

"""Goal analysis: validate a goal, score its feasibility, suggest alternatives."""
from datetime import datetime
import logging
from typing import Optional
import uuid

from study_planner.config import PlannerSettings
from study_planner.errors import InvalidGoalRequest, NonPositiveTimeWindow
from study_planner.models.goal import GoalAnalysisResult, StudyGoal
from study_planner.tools.feasibility import (
    calculate_feasibility_score,
    generate_alternative_timelines,
    generate_recommendations,
    is_feasible,
)
from study_planner.tools.goal_validation import validate_goal_request
from study_planner.tools.plan_store import RecordStore, save_goal_analysis
from study_planner.tools.time_constraints import (
    calculate_estimated_completion,
    calculate_time_constraints,
    parse_target_date,
    utc_now,
)
from study_planner.tools.topic_catalog import InMemoryTopicCatalog, TopicCatalogProvider

logger = logging.getLogger(__name__)


def build_goal(request: dict) -> StudyGoal:
    """
    Validate a raw request and turn it into a StudyGoal.

    Raises:
        InvalidGoalRequest: with every violation found
    """
    validation = validate_goal_request(request)
    if not validation.valid:
        raise InvalidGoalRequest(validation.errors)

    def field(camel: str, snake: str):
        return request[camel] if camel in request else request.get(snake)

    return StudyGoal(
        user_id=field("userId", "user_id"),
        goal_type=field("goalType", "goal_type"),
        subject=request["subject"],
        target_date=parse_target_date(field("targetDate", "target_date")),
        available_daily_hours=field("availableDailyHours", "available_daily_hours"),
        current_level=field("currentLevel", "current_level"),
        specific_topics=field("specificTopics", "specific_topics") or None,
    )


def _generate_goal_id() -> str:
    return f"goal_{uuid.uuid4().hex}"


def analyze_goal(
    request: dict,
    catalog: Optional[TopicCatalogProvider] = None,
    settings: Optional[PlannerSettings] = None,
    now: Optional[datetime] = None
) -> GoalAnalysisResult:
    """
    Analyze a study goal request.

    Args:
        request: Raw goal request (userId, goalType, subject, targetDate,
            availableDailyHours, currentLevel, specificTopics?)
        catalog: Topic catalog; defaults to the built-in subject tables
        settings: Thresholds; defaults to PlannerSettings()
        now: Reference time; defaults to the current UTC time

    Returns:
        GoalAnalysisResult (not persisted)

    Raises:
        InvalidGoalRequest: request failed validation
        NonPositiveTimeWindow: target date is not in the future
    """
    catalog = catalog or InMemoryTopicCatalog()
    settings = settings or PlannerSettings()
    now = now or utc_now()

    goal = build_goal(request)

    time_constraints = calculate_time_constraints(
        goal.target_date, goal.available_daily_hours, now=now
    )
    if time_constraints.total_days <= 0:
        raise NonPositiveTimeWindow(time_constraints.total_days)

    estimated_count = catalog.estimate_topic_count(
        goal.subject, goal.goal_type, goal.specific_topics
    )
    hours_per_topic = catalog.hours_per_topic(goal.current_level, goal.goal_type)
    topics = catalog.build_topics(
        goal.subject, estimated_count, hours_per_topic, goal.specific_topics
    )
    topic_count = len(topics)
    total_required_hours = topic_count * hours_per_topic

    feasibility_score = calculate_feasibility_score(
        time_constraints.total_hours, total_required_hours, goal.current_level
    )
    feasible = is_feasible(feasibility_score, settings.feasibility_threshold)

    recommendations = generate_recommendations(
        feasibility_score, time_constraints, total_required_hours, goal.current_level
    )

    alternatives = None
    if not feasible:
        alternatives = generate_alternative_timelines(
            goal.target_date,
            goal.available_daily_hours,
            total_required_hours,
            time_constraints,
            now=now,
        )

    result = GoalAnalysisResult(
        goal_id=_generate_goal_id(),
        user_id=goal.user_id,
        goal_type=goal.goal_type,
        subject=goal.subject,
        target_date=goal.target_date,
        available_daily_hours=goal.available_daily_hours,
        current_level=goal.current_level,
        specific_topics=goal.specific_topics,
        time_constraints=time_constraints,
        feasibility_score=feasibility_score,
        is_feasible=feasible,
        estimated_completion_date=calculate_estimated_completion(
            total_required_hours, goal.available_daily_hours, now=now
        ),
        recommendations=recommendations,
        alternatives=alternatives,
        topic_count=topic_count,
        estimated_hours_per_topic=hours_per_topic,
        created_at=now,
    )

    logger.info(
        "Analyzed goal %s: %s/%s, %d topics x %sh, score %d (%s)",
        result.goal_id, goal.subject, goal.goal_type, topic_count, hours_per_topic,
        feasibility_score, "feasible" if feasible else "not feasible"
    )
    return result


def analyze_and_store_goal(
    request: dict,
    store: RecordStore,
    catalog: Optional[TopicCatalogProvider] = None,
    settings: Optional[PlannerSettings] = None,
    now: Optional[datetime] = None
) -> GoalAnalysisResult:
    """Analyze a goal and persist the result under (user_id, goal_id)."""
    result = analyze_goal(request, catalog=catalog, settings=settings, now=now)
    save_goal_analysis(store, result)
    return result

"""Plan generation: turn a stored goal analysis into a day-by-day study plan."""
from datetime import datetime, timedelta
import logging
from typing import Optional
import uuid

from study_planner.config import PlannerSettings
from study_planner.errors import PlanNotFeasible
from study_planner.models.goal import GoalAnalysisResult
from study_planner.models.plan import StudyPlan, StudyPlanRequest
from study_planner.models.topic import Topic
from study_planner.tools.milestones import generate_milestones
from study_planner.tools.plan_store import RecordStore, get_goal_analysis, save_study_plan
from study_planner.tools.plan_validation import validate_plan_feasibility
from study_planner.tools.prioritizer import prioritize_topics
from study_planner.tools.session_allocator import generate_daily_sessions
from study_planner.tools.syllabus_topics import SyllabusTopicSource
from study_planner.tools.time_constraints import utc_now
from study_planner.tools.topic_catalog import InMemoryTopicCatalog, TopicCatalogProvider

logger = logging.getLogger(__name__)


def generate_topics(
    goal: GoalAnalysisResult,
    request: StudyPlanRequest,
    catalog: TopicCatalogProvider,
    syllabus_source: Optional[SyllabusTopicSource] = None
) -> list[Topic]:
    """
    Topics for the plan, from the first source that yields any:
    custom topics, syllabus documents, the goal's specific topics, the catalog.
    """
    hours = goal.estimated_hours_per_topic

    if request.custom_topics:
        names = [name.strip() for name in request.custom_topics if name.strip()]
        if names:
            return catalog.topics_from_names(goal.subject, names, hours, "custom")

    if request.syllabus_document_ids and syllabus_source is not None:
        names = syllabus_source.get_topic_names(goal.user_id, request.syllabus_document_ids)
        if names:
            logger.info("Using %d syllabus topics for goal %s", len(names), goal.goal_id)
            return catalog.topics_from_names(goal.subject, names, hours, "syllabus")
        logger.info("No syllabus topics found for goal %s, using catalog", goal.goal_id)

    return catalog.build_topics(
        goal.subject, goal.topic_count, hours, goal.specific_topics
    )


def _generate_plan_id() -> str:
    return f"plan_{uuid.uuid4().hex}"


def generate_study_plan(
    goal: GoalAnalysisResult,
    request: StudyPlanRequest,
    catalog: Optional[TopicCatalogProvider] = None,
    syllabus_source: Optional[SyllabusTopicSource] = None,
    settings: Optional[PlannerSettings] = None,
    now: Optional[datetime] = None
) -> StudyPlan:
    """
    Build a study plan for an analyzed goal.

    Pipeline: topics -> prioritize -> feasibility gate -> daily sessions ->
    milestones. Day 1 is the date of `now`.

    Raises:
        PlanNotFeasible: hour budget exceeded or horizon shorter than the minimum
        CyclicPrerequisiteError: only with settings.strict_prerequisites
    """
    catalog = catalog or InMemoryTopicCatalog()
    settings = settings or PlannerSettings()
    now = now or utc_now()

    topics = generate_topics(goal, request, catalog, syllabus_source)
    prioritized_topics = prioritize_topics(
        topics, goal.current_level, strict=settings.strict_prerequisites
    )

    feasibility = validate_plan_feasibility(
        prioritized_topics,
        goal.time_constraints,
        hours_tolerance=settings.hours_tolerance,
        min_days=settings.min_plan_days,
    )
    if not feasibility.is_feasible:
        logger.info("Plan for goal %s not feasible: %s", goal.goal_id, feasibility.reason)
        raise PlanNotFeasible(feasibility.reason, feasibility.suggestions)

    start_date = now.date()
    daily_sessions = generate_daily_sessions(
        prioritized_topics,
        goal.time_constraints.total_days,
        goal.time_constraints.daily_hours,
        start_date,
    )
    milestones = generate_milestones(daily_sessions)

    total_duration = len(daily_sessions)
    estimated_completion = goal.target_date
    if total_duration > goal.time_constraints.total_days:
        estimated_completion = now + timedelta(days=total_duration)

    plan = StudyPlan(
        plan_id=_generate_plan_id(),
        user_id=request.user_id,
        goal_id=goal.goal_id,
        daily_sessions=daily_sessions,
        total_duration=total_duration,
        estimated_completion=estimated_completion,
        topic_sequence=[topic.topic_id for topic in prioritized_topics],
        topics=prioritized_topics,
        milestones=milestones,
        status="active",
        created_at=now,
    )

    logger.info(
        "Generated plan %s for goal %s: %d topics over %d days, %d milestones",
        plan.plan_id, goal.goal_id, len(prioritized_topics), total_duration, len(milestones)
    )
    return plan


def generate_and_store_plan(
    request: StudyPlanRequest,
    store: RecordStore,
    catalog: Optional[TopicCatalogProvider] = None,
    syllabus_source: Optional[SyllabusTopicSource] = None,
    settings: Optional[PlannerSettings] = None,
    now: Optional[datetime] = None
) -> StudyPlan:
    """
    Load the goal analysis for request.goal_id, generate a plan, persist it.

    Raises:
        NotFound: no goal analysis stored for (user_id, goal_id)
    """
    goal = get_goal_analysis(store, request.user_id, request.goal_id)
    plan = generate_study_plan(
        goal,
        request,
        catalog=catalog,
        syllabus_source=syllabus_source,
        settings=settings,
        now=now,
    )
    save_study_plan(store, plan)
    return plan

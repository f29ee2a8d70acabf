"""ADK tool wrappers for study planning.

Each tool is a Python function over the planner pipelines. Tools never
raise: they return a dict with "status" ("success" or "error") and a
human-readable "message" the agent can relay.
"""
from datetime import date
import logging
from typing import Literal, Optional

from pydantic import ValidationError

# Set up logging
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from study_planner.config import PlannerSettings
from study_planner.errors import PlannerError
from study_planner.models.plan import StudyPlanRequest
from study_planner.models.progress import ProgressUpdate
from study_planner.tools.goal_analysis import analyze_and_store_goal
from study_planner.tools.plan_generator import generate_and_store_plan
from study_planner.tools.plan_store import JsonFileRecordStore, get_goal_analysis, get_study_plan
from study_planner.tools.progress_tracker import get_plan_progress, record_topic_progress, update_plan_status
from study_planner.tools.syllabus_topics import FileSyllabusTopicSource, extract_syllabus_topics


def _settings() -> PlannerSettings:
    return PlannerSettings()


def _store(settings: PlannerSettings) -> JsonFileRecordStore:
    return JsonFileRecordStore(settings.records_dir)


def _error(e: Exception, action: str) -> dict:
    """Status dict for a failed tool call."""
    if isinstance(e, PlannerError):
        logger.info("%s failed: %s", action, e.message)
        return {"status": "error", **e.to_dict()}
    logger.exception("%s failed unexpectedly", action)
    return {
        "status": "error",
        "error": "InternalError",
        "code": "INTERNAL_ERROR",
        "message": f"{action} failed: {str(e)}"
    }


# ============================================================================
# GOAL ANALYSIS TOOLS
# ============================================================================

def get_current_date() -> dict:
    """
    Get the current date, for turning "in 3 weeks" into a target date.

    Returns:
        dict with:
        - status: "success"
        - today: current date in YYYY-MM-DD format
        - day_of_week: name of the day (Monday, Tuesday, etc.)
        - message: human-readable current date
    """
    today = date.today()
    day_name = today.strftime("%A")

    return {
        "status": "success",
        "today": today.isoformat(),
        "day_of_week": day_name,
        "message": f"Today is {day_name}, {today.strftime('%B %d, %Y')}"
    }


def analyze_study_goal(
    user_id: str,
    goal_type: Literal["exam", "interview", "job", "project"],
    subject: str,
    target_date: str,
    available_daily_hours: float,
    current_level: Literal["beginner", "intermediate", "advanced"],
    specific_topics: Optional[list[str]] = None
) -> dict:
    """
    Assess whether a study goal fits the learner's time budget.

    Args:
        user_id: Learner ID
        goal_type: exam, interview, job or project
        subject: What to study (e.g. "Python", "Data Structures")
        target_date: Deadline (ISO date, YYYY-MM-DD)
        available_daily_hours: Hours per day the learner can study (0-24]
        current_level: beginner, intermediate or advanced
        specific_topics: Optional explicit topic list

    Returns:
        dict with:
        - status: "success" or "error"
        - goal_id: ID to pass to generate_study_plan_tool
        - feasibility_score: 0-100
        - is_feasible: True when score >= 60
        - alternatives: better timelines when not feasible
        - analysis: full GoalAnalysisResult (camelCase JSON)
        - message: summary message
    """
    request = {
        "userId": user_id,
        "goalType": goal_type,
        "subject": subject,
        "targetDate": target_date,
        "availableDailyHours": available_daily_hours,
        "currentLevel": current_level,
    }
    if specific_topics:
        request["specificTopics"] = specific_topics

    try:
        settings = _settings()
        result = analyze_and_store_goal(request, _store(settings), settings=settings)
        verdict = "feasible" if result.is_feasible else "not feasible"
        message = (
            f"Goal is {verdict} (score {result.feasibility_score}/100): "
            f"{result.topic_count} topics x {result.estimated_hours_per_topic:g}h, "
            f"{result.time_constraints.total_hours:g}h available over {result.time_constraints.total_days} days"
        )
        if result.alternatives:
            best = result.alternatives[0]
            message += f". Best alternative: {best.description} (score {best.feasibility_score})"

        return {
            "status": "success",
            "goal_id": result.goal_id,
            "feasibility_score": result.feasibility_score,
            "is_feasible": result.is_feasible,
            "recommendations": result.recommendations,
            "alternatives": [alt.to_json_dict() for alt in result.alternatives or []],
            "analysis": result.to_json_dict(),
            "message": message
        }

    except Exception as e:
        return _error(e, "Goal analysis")


def get_goal_analysis_tool(user_id: str, goal_id: str) -> dict:
    """
    Fetch a stored goal analysis.

    Args:
        user_id: Learner ID
        goal_id: ID returned by analyze_study_goal

    Returns:
        dict with status, analysis (camelCase JSON) and message
    """
    try:
        result = get_goal_analysis(_store(_settings()), user_id, goal_id)
        return {
            "status": "success",
            "analysis": result.to_json_dict(),
            "message": f"{result.subject} ({result.goal_type}), score {result.feasibility_score}/100"
        }
    except Exception as e:
        return _error(e, "Goal lookup")


# ============================================================================
# PLAN TOOLS
# ============================================================================

def extract_syllabus_topics_tool(document_id: str, syllabus_text: str) -> dict:
    """
    Extract topic names from syllabus text so plans can follow the syllabus.

    Args:
        document_id: ID to store the topics under (pass it later in
            syllabus_document_ids)
        syllabus_text: Plain text of the syllabus

    Returns:
        dict with status, topics, method ("llm" or "heuristic"), output_path, message
    """
    try:
        settings = _settings()
        logger.info(f"📄 Extracting syllabus topics for {document_id}...")
        syllabus = extract_syllabus_topics(document_id, syllabus_text, model=settings.model)
        output_path = FileSyllabusTopicSource(settings.syllabus_topics_dir).save(syllabus)
        logger.info(f"✅ Found {len(syllabus.topics)} topics in {document_id} ({syllabus.method})")

        return {
            "status": "success",
            "document_id": document_id,
            "topics": syllabus.topics,
            "method": syllabus.method,
            "output_path": str(output_path),
            "message": f"Extracted {len(syllabus.topics)} topics ({syllabus.method})"
        }
    except Exception as e:
        return _error(e, "Syllabus topic extraction")


def generate_study_plan_tool(
    user_id: str,
    goal_id: str,
    syllabus_document_ids: Optional[list[str]] = None,
    custom_topics: Optional[list[str]] = None
) -> dict:
    """
    Generate a day-by-day study plan for an analyzed goal.

    Args:
        user_id: Learner ID
        goal_id: ID returned by analyze_study_goal
        syllabus_document_ids: Syllabi whose extracted topics should be used
        custom_topics: Explicit topic names (take precedence over syllabi)

    Returns:
        dict with:
        - status: "success" or "error"
        - plan_id: generated plan ID
        - total_days: number of study days
        - total_topics: number of topics
        - milestones: checkpoint list
        - suggestions: present when the plan is not feasible
        - message: summary message
    """
    try:
        settings = _settings()
        request = StudyPlanRequest(
            user_id=user_id,
            goal_id=goal_id,
            syllabus_document_ids=syllabus_document_ids,
            custom_topics=custom_topics,
        )
        logger.info(f"🗓️  Generating study plan for goal {goal_id}...")
        plan = generate_and_store_plan(
            request,
            _store(settings),
            syllabus_source=FileSyllabusTopicSource(settings.syllabus_topics_dir),
            settings=settings,
        )
        total_hours = sum(session.total_hours for session in plan.daily_sessions)

        return {
            "status": "success",
            "plan_id": plan.plan_id,
            "total_days": plan.total_duration,
            "total_topics": len(plan.topic_sequence),
            "total_hours": total_hours,
            "milestones": [m.to_json_dict() for m in plan.milestones],
            "message": f"Created {plan.total_duration}-day plan with {len(plan.topic_sequence)} topics ({total_hours:.1f} hours)"
        }

    except ValidationError as e:
        return {"status": "error", "code": "INVALID_PLAN_REQUEST", "message": f"Invalid plan request: {e}"}
    except Exception as e:
        return _error(e, "Plan generation")


def get_study_plan_tool(user_id: str, plan_id: str, day: Optional[int] = None) -> dict:
    """
    Fetch a stored study plan, or a single day of it.

    Args:
        user_id: Learner ID
        plan_id: Plan ID
        day: Optional 1-indexed day to return instead of the whole plan

    Returns:
        dict with status, plan or session (camelCase JSON), and message
    """
    try:
        plan = get_study_plan(_store(_settings()), user_id, plan_id)
        if day is not None:
            session = next((s for s in plan.daily_sessions if s.day == day), None)
            if session is None:
                return {"status": "error", "message": f"Day {day} is outside the {plan.total_duration}-day plan"}
            return {
                "status": "success",
                "session": session.to_json_dict(),
                "message": f"Day {day}: {session.focus_area} ({session.total_hours:g}h)"
            }
        return {
            "status": "success",
            "plan": plan.to_json_dict(),
            "message": f"{plan.total_duration}-day plan, status {plan.status}"
        }
    except Exception as e:
        return _error(e, "Plan lookup")


# ============================================================================
# PROGRESS TOOLS
# ============================================================================

def update_topic_progress(
    user_id: str,
    plan_id: str,
    topic_id: str,
    status: Literal["not_started", "in_progress", "completed", "skipped"],
    hours_spent: float = 0.0,
    notes: Optional[str] = None,
    confidence: Optional[int] = None
) -> dict:
    """
    Log study progress on one topic of a plan.

    Args:
        user_id: Learner ID
        plan_id: Plan ID
        topic_id: Topic ID from the plan's topic sequence
        status: not_started, in_progress, completed or skipped
        hours_spent: Hours studied in this entry (added to previous entries)
        notes: Optional note to append
        confidence: Optional self-rating 1-5

    Returns:
        dict with status, progress (camelCase JSON) and message
    """
    try:
        update = ProgressUpdate(
            topic_id=topic_id,
            status=status,
            hours_spent=hours_spent,
            notes=notes,
            confidence=confidence,
        )
        progress = record_topic_progress(_store(_settings()), user_id, plan_id, update)
        return {
            "status": "success",
            "progress": progress.to_json_dict(),
            "message": f"{progress.topic_name}: {progress.status}, {progress.hours_spent:g}h of {progress.hours_allocated:g}h"
        }
    except ValidationError as e:
        return {"status": "error", "code": "INVALID_PROGRESS_UPDATE", "message": f"Invalid progress update: {e}"}
    except Exception as e:
        return _error(e, "Progress update")


def get_plan_progress_tool(user_id: str, plan_id: str) -> dict:
    """
    Summarize progress on a plan.

    Returns:
        dict with status, overall_progress (0-100), on_track, days_remaining,
        progress (camelCase JSON) and message
    """
    try:
        progress = get_plan_progress(_store(_settings()), user_id, plan_id)
        track = "on track" if progress.on_track else "behind schedule"
        return {
            "status": "success",
            "overall_progress": progress.overall_progress,
            "on_track": progress.on_track,
            "days_remaining": progress.days_remaining,
            "progress": progress.to_json_dict(),
            "message": f"{progress.completed_topics}/{progress.total_topics} topics done ({progress.overall_progress}%), {track}"
        }
    except Exception as e:
        return _error(e, "Progress lookup")


def set_plan_status(
    user_id: str,
    plan_id: str,
    status: Literal["active", "paused", "completed"]
) -> dict:
    """
    Pause, resume (active) or complete a plan.

    Returns:
        dict with status, plan_status and message
    """
    try:
        plan = update_plan_status(_store(_settings()), user_id, plan_id, status)
        return {
            "status": "success",
            "plan_status": plan.status,
            "message": f"Plan {plan_id} is now {plan.status}"
        }
    except Exception as e:
        return _error(e, "Status update")

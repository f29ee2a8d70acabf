"""Batch validation of raw goal requests."""
import math
from typing import Any

from study_planner.models.goal import GOAL_TYPES, SKILL_LEVELS, GoalValidationResult
from study_planner.tools.time_constraints import parse_target_date


def _field(request: dict, camel: str, snake: str) -> Any:
    """Read a request field by its camelCase or snake_case name."""
    if camel in request:
        return request[camel]
    return request.get(snake)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def validate_goal_request(request: dict) -> GoalValidationResult:
    """
    Validate a goal request, collecting every violation.

    Args:
        request: Raw request dict (camelCase keys; snake_case also accepted)

    Returns:
        GoalValidationResult with valid flag and the full error list
    """
    errors: list[str] = []

    user_id = _field(request, "userId", "user_id")
    if not user_id or not isinstance(user_id, str):
        errors.append("userId is required")

    goal_type = _field(request, "goalType", "goal_type")
    if goal_type not in GOAL_TYPES:
        errors.append("Valid goalType is required (exam, interview, job, project)")

    subject = request.get("subject")
    if not isinstance(subject, str) or not subject.strip():
        errors.append("subject is required")

    target_date = _field(request, "targetDate", "target_date")
    if not target_date:
        errors.append("targetDate is required")
    else:
        try:
            parse_target_date(target_date)
        except (TypeError, ValueError):
            errors.append("targetDate must be a valid ISO date string")

    daily_hours = _field(request, "availableDailyHours", "available_daily_hours")
    if not _is_number(daily_hours) or daily_hours <= 0:
        errors.append("availableDailyHours must be greater than 0")
    elif daily_hours > 24:
        errors.append("availableDailyHours cannot exceed 24 hours")

    current_level = _field(request, "currentLevel", "current_level")
    if current_level not in SKILL_LEVELS:
        errors.append("Valid currentLevel is required (beginner, intermediate, advanced)")

    specific_topics = _field(request, "specificTopics", "specific_topics")
    if specific_topics is not None:
        if not isinstance(specific_topics, list) or not all(
            isinstance(t, str) and t.strip() for t in specific_topics
        ):
            errors.append("specificTopics must be a list of non-empty topic names")

    return GoalValidationResult(valid=not errors, errors=errors)

"""Typed failures raised by the planning pipelines.

Pure components return values (validation results, feasibility verdicts);
the goal-analysis and plan-generation pipelines raise these. Agent tools and
CLIs convert them into status dicts / console output.
"""
from typing import Optional


class PlannerError(Exception):
    """Base exception for the study planner."""
    code: str = "PLANNER_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Machine-readable error payload."""
        return {"error": type(self).__name__, "code": self.code, "message": self.message}


class InvalidGoalRequest(PlannerError):
    """Goal request failed validation. Carries every violation, not just the first."""
    code = "INVALID_GOAL_REQUEST"

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid goal request: " + "; ".join(self.errors))

    def to_dict(self) -> dict:
        return {**super().to_dict(), "details": self.errors}


class NonPositiveTimeWindow(PlannerError):
    """Target date is not strictly in the future."""
    code = "NON_POSITIVE_TIME_WINDOW"

    def __init__(self, total_days: int):
        self.total_days = total_days
        super().__init__(
            "Target date must be in the future. "
            "Please select a target date that is at least 1 day from now"
        )


class PlanNotFeasible(PlannerError):
    """Plan-level gate failed (hour budget or horizon too small)."""
    code = "PLAN_NOT_FEASIBLE"

    def __init__(self, reason: str, suggestions: Optional[list[str]] = None):
        self.reason = reason
        self.suggestions = list(suggestions or [])
        super().__init__(f"Plan is not feasible with current constraints: {reason}")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "details": self.reason, "suggestions": self.suggestions}


class NotFound(PlannerError):
    """Referenced record does not exist in the store."""
    code = "NOT_FOUND"

    def __init__(self, record_type: str, record_id: str):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(f"{record_type} not found: {record_id}")


class CyclicPrerequisiteError(PlannerError):
    """Prerequisites could not be ordered (strict prioritization only)."""
    code = "CYCLIC_PREREQUISITES"

    def __init__(self, topic_names: list[str]):
        self.topic_names = list(topic_names)
        super().__init__(
            "Cyclic or unresolvable prerequisites among: " + ", ".join(self.topic_names)
        )


class InvalidPlanState(PlannerError):
    """Requested plan status change is not allowed."""
    code = "INVALID_PLAN_STATE"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change plan status from '{current}' to '{requested}'")


class InternalError(PlannerError):
    """Unexpected failure, e.g. the record store is unavailable. Not retried here."""
    code = "INTERNAL_ERROR"

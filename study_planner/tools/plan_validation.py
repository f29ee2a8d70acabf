"""Plan-level feasibility gate run before allocating sessions."""
from study_planner.models.goal import TimeConstraints
from study_planner.models.plan import PlanFeasibility
from study_planner.models.topic import Topic


def validate_plan_feasibility(
    topics: list[Topic],
    time_constraints: TimeConstraints,
    hours_tolerance: float = 1.2,
    min_days: int = 7
) -> PlanFeasibility:
    """
    Check the hour budget and the planning horizon.

    Required hours may exceed available hours by up to hours_tolerance
    (1.2 = 20%). The horizon must be at least min_days.
    """
    total_required_hours = sum(topic.estimated_hours for topic in topics)
    total_available_hours = time_constraints.total_days * time_constraints.daily_hours

    if total_required_hours > total_available_hours * hours_tolerance:
        return PlanFeasibility(
            is_feasible=False,
            reason=(
                f"Required {total_required_hours:g} hours but only "
                f"{total_available_hours:g} hours available"
            ),
            suggestions=[
                "Extend your target date",
                "Increase daily study hours",
                "Reduce the number of topics to cover",
            ],
        )

    if time_constraints.total_days < min_days:
        return PlanFeasibility(
            is_feasible=False,
            reason=f"Study plan requires at least {min_days} days for effective learning",
            suggestions=[f"Extend your target date to at least {min_days} days from now"],
        )

    return PlanFeasibility(is_feasible=True)

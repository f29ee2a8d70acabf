"""Feasibility scoring, recommendations and alternative timelines."""
from datetime import datetime, timedelta
import math
from typing import Optional

from study_planner.models.goal import AlternativeTimeline, SkillLevel, TimeConstraints
from study_planner.tools.time_constraints import utc_now


FEASIBILITY_THRESHOLD = 60


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (round() is banker's)."""
    return math.floor(value + 0.5)


def calculate_feasibility_score(
    available_hours: float,
    required_hours: float,
    skill_level: SkillLevel
) -> int:
    """
    Score available vs required study time on a 0-100 scale.

    Time ratio sets the base; advanced learners get x1.2 (capped), beginners
    x0.9. A 20% buffer earns +10, a ratio under 0.8 costs x0.8.
    """
    if required_hours <= 0:
        return 100

    time_ratio = available_hours / required_hours
    score = min(time_ratio * 100, 100)

    if skill_level == "advanced":
        score = min(score * 1.2, 100)
    elif skill_level == "beginner":
        score = score * 0.9

    if time_ratio >= 1.2:
        score = min(score + 10, 100)
    elif time_ratio < 0.8:
        score = score * 0.8

    return max(0, min(round_half_up(score), 100))


def is_feasible(score: int, threshold: int = FEASIBILITY_THRESHOLD) -> bool:
    return score >= threshold


def generate_recommendations(
    feasibility_score: int,
    time_constraints: TimeConstraints,
    required_hours: float,
    skill_level: SkillLevel
) -> list[str]:
    """Advice strings: score tier, then skill level, then daily load."""
    recommendations = []

    if feasibility_score >= 80:
        recommendations.append("Your timeline looks great! You have sufficient time to cover all topics thoroughly.")
        recommendations.append("Consider using extra time for practice problems and mock tests.")
    elif feasibility_score >= 60:
        recommendations.append("Your timeline is feasible but will require consistent effort.")
        recommendations.append("Stick to your daily study schedule to stay on track.")
        recommendations.append("Focus on understanding core concepts before moving to advanced topics.")
    elif feasibility_score >= 40:
        recommendations.append("Your timeline is tight. Consider extending your target date if possible.")
        recommendations.append("Prioritize high-impact topics and skip less critical areas.")
        recommendations.append("Increase daily study hours if you can manage it.")
    else:
        recommendations.append("Your current timeline is not realistic for comprehensive preparation.")
        recommendations.append("We strongly recommend extending your target date or increasing daily study hours.")
        recommendations.append("See alternative timelines below for more feasible options.")

    if skill_level == "beginner":
        recommendations.append("As a beginner, allocate extra time for foundational concepts.")
        recommendations.append("Don't rush - understanding basics well will help you learn faster later.")
    elif skill_level == "advanced":
        recommendations.append("Leverage your experience to move quickly through familiar topics.")
        recommendations.append("Focus more time on areas outside your expertise.")

    if time_constraints.daily_hours < 2:
        recommendations.append("Consider increasing daily study time to at least 2 hours for better retention.")
    elif time_constraints.daily_hours > 6:
        recommendations.append("Be careful not to burn out with long study sessions. Take regular breaks.")

    if required_hours > time_constraints.total_hours and feasibility_score >= 60:
        recommendations.append("Required hours exceed your schedule; keep a buffer day each week.")

    return recommendations


def generate_alternative_timelines(
    original_target_date: datetime,
    original_daily_hours: float,
    required_hours: float,
    time_constraints: TimeConstraints,
    now: Optional[datetime] = None
) -> list[AlternativeTimeline]:
    """
    Three rescored variants of an infeasible goal, best first.

    Every variant is scored as an intermediate learner regardless of the
    requested level.
    """
    now = now or utc_now()
    total_days = time_constraints.total_days
    alternatives = []

    # Extend the date by 50%
    extended_days = math.ceil(total_days * 1.5)
    alternatives.append(AlternativeTimeline(
        description="Extended Timeline",
        adjusted_target_date=now + timedelta(days=extended_days),
        adjusted_daily_hours=original_daily_hours,
        adjusted_total_days=extended_days,
        feasibility_score=calculate_feasibility_score(
            extended_days * original_daily_hours, required_hours, "intermediate"
        ),
        reasoning=(
            f"Extend your target date by {math.ceil(total_days * 0.5)} days "
            "to have more comfortable preparation time."
        ),
    ))

    # Study 50% longer each day, capped at 8 hours
    increased_daily_hours = min(original_daily_hours * 1.5, 8)
    alternatives.append(AlternativeTimeline(
        description="Increased Daily Hours",
        adjusted_target_date=original_target_date,
        adjusted_daily_hours=increased_daily_hours,
        adjusted_total_days=total_days,
        feasibility_score=calculate_feasibility_score(
            total_days * increased_daily_hours, required_hours, "intermediate"
        ),
        reasoning=(
            f"Increase daily study time to {increased_daily_hours:.1f} hours "
            "while keeping the same target date."
        ),
    ))

    # A bit of both: +25% days, +25% hours capped at 6
    balanced_days = math.ceil(total_days * 1.25)
    balanced_daily_hours = min(original_daily_hours * 1.25, 6)
    alternatives.append(AlternativeTimeline(
        description="Balanced Approach",
        adjusted_target_date=now + timedelta(days=balanced_days),
        adjusted_daily_hours=balanced_daily_hours,
        adjusted_total_days=balanced_days,
        feasibility_score=calculate_feasibility_score(
            balanced_days * balanced_daily_hours, required_hours, "intermediate"
        ),
        reasoning=(
            f"Extend target date by {math.ceil(total_days * 0.25)} days and increase "
            f"daily hours to {balanced_daily_hours:.1f} for a balanced approach."
        ),
    ))

    return sorted(alternatives, key=lambda alt: alt.feasibility_score, reverse=True)

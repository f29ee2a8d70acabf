"""Checkpoint milestones at 25/50/75/100% of the plan horizon."""
import math

from study_planner.models.plan import DailySession, Milestone


MILESTONE_FRACTIONS = (0.25, 0.50, 0.75)


def generate_milestones(sessions: list[DailySession]) -> list[Milestone]:
    """
    Review milestones at each quarter, an assessment on the last day.

    Each milestone lists the distinct topic names (first-seen order) covered
    in sessions 1..day, so coverage only grows from one milestone to the next.
    """
    total_days = len(sessions)
    milestone_days = [math.floor(total_days * fraction) for fraction in MILESTONE_FRACTIONS]
    milestone_days.append(total_days)
    last_index = len(milestone_days) - 1

    milestones = []
    for index, day in enumerate(milestone_days):
        if not 0 < day <= total_days:
            continue

        topics_covered = []
        for session in sessions[:day]:
            for session_topic in session.topics:
                if session_topic.topic_name not in topics_covered:
                    topics_covered.append(session_topic.topic_name)

        is_final = index == last_index
        milestones.append(Milestone(
            day=day,
            description=(
                "Complete all topics and final review"
                if is_final
                else f"{(index + 1) * 25}% completion checkpoint"
            ),
            topics=topics_covered,
            checkpoint_type="assessment" if is_final else "review",
        ))

    return milestones

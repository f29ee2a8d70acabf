"""Greedy bin-packing of prioritized topic hours into daily sessions."""
from datetime import date, timedelta
import logging

from study_planner.models.plan import DailySession, SessionTopic
from study_planner.models.topic import Topic

logger = logging.getLogger(__name__)

# Absorbs float residue when hours like 0.1 are subtracted repeatedly
EPSILON = 1e-9

REVIEW_FOCUS = "Review and Practice"


def generate_activities(topic: Topic, hours: float) -> list[str]:
    """Activities for one topic on one day, scaled by hours allocated that day."""
    activities = []

    if hours >= 1:
        activities.append(f"Watch tutorial videos on {topic.name}")
        activities.append("Read documentation and examples")

    if hours >= 2:
        activities.append("Practice coding exercises")
        activities.append("Build small projects")

    if hours >= 3:
        activities.append("Review and debug code")
        activities.append("Take notes and create summaries")

    return activities


def generate_learning_objectives(topic: Topic) -> list[str]:
    return [
        f"Understand core concepts of {topic.name}",
        f"Apply {topic.name} in practical scenarios",
        "Identify common patterns and best practices",
    ]


def _clean_hours(hours: float) -> float:
    """Trim float noise (e.g. 0.30000000000000004) from reported hours."""
    return round(hours, 6)


def generate_daily_sessions(
    topics: list[Topic],
    total_days: int,
    daily_hours: float,
    start_date: date
) -> list[DailySession]:
    """
    Pack topics, in order, into days of daily_hours capacity.

    A cursor walks the topic list; each step gives the current topic
    min(day remaining, topic remaining) hours. Days left after the topics run
    out become review days. If total_days cannot hold every hour, extra days
    with the same cap are appended until all topics are placed, so every
    topic's allocations sum to its estimated hours.

    Args:
        topics: Prioritized topics
        total_days: Planned horizon in days
        daily_hours: Capacity of each day
        start_date: Date of day 1

    Returns:
        One DailySession per day, day numbers starting at 1
    """
    if not daily_hours > EPSILON:  # also rejects NaN
        raise ValueError("daily_hours must be greater than 0")

    sessions = []
    current_topic_index = 0
    remaining_hours_in_topic = topics[0].estimated_hours if topics else 0.0

    day = 0
    while day < total_days or current_topic_index < len(topics):
        day += 1
        if day == total_days + 1:
            logger.warning(
                "Horizon of %d days cannot hold all topic hours; adding overflow days",
                total_days
            )

        session_topics = []
        remaining_daily_hours = daily_hours

        while remaining_daily_hours > EPSILON and current_topic_index < len(topics):
            current_topic = topics[current_topic_index]
            hours_to_allocate = min(remaining_daily_hours, remaining_hours_in_topic)

            session_topics.append(SessionTopic(
                topic_id=current_topic.topic_id,
                topic_name=current_topic.name,
                allocated_hours=_clean_hours(hours_to_allocate),
                activities=generate_activities(current_topic, hours_to_allocate),
                learning_objectives=generate_learning_objectives(current_topic),
            ))

            remaining_daily_hours -= hours_to_allocate
            remaining_hours_in_topic -= hours_to_allocate

            if remaining_hours_in_topic <= EPSILON:
                current_topic_index += 1
                if current_topic_index < len(topics):
                    remaining_hours_in_topic = topics[current_topic_index].estimated_hours

        focus_area = session_topics[0].topic_name if session_topics else REVIEW_FOCUS
        goals = [
            f"Complete {st.allocated_hours:.1f} hours on {st.topic_name}"
            for st in session_topics
        ]

        sessions.append(DailySession(
            day=day,
            date=(start_date + timedelta(days=day - 1)).isoformat(),
            topics=session_topics,
            total_hours=min(daily_hours, _clean_hours(sum(st.allocated_hours for st in session_topics))),
            focus_area=focus_area,
            goals=goals,
        ))

    return sessions

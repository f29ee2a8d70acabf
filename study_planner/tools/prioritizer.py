"""Order topics by priority while respecting prerequisites."""
import logging

from study_planner.errors import CyclicPrerequisiteError
from study_planner.models.topic import Topic

logger = logging.getLogger(__name__)

DIFFICULTY_ORDER = {"easy": 0, "medium": 1, "hard": 2}


def sort_topics(topics: list[Topic], current_level: str) -> list[Topic]:
    """
    Stable sort: priority desc, then (beginners only) difficulty asc,
    then fewer prerequisites first.
    """
    beginner = current_level == "beginner"

    def sort_key(topic: Topic) -> tuple[int, int, int]:
        difficulty_rank = DIFFICULTY_ORDER[topic.difficulty] if beginner else 0
        return (-topic.priority, difficulty_rank, len(topic.prerequisites))

    return sorted(topics, key=sort_key)


def prioritize_topics(
    topics: list[Topic],
    current_level: str,
    strict: bool = False
) -> list[Topic]:
    """
    Sort topics, then emit them in prerequisite-respecting order.

    Each pass scans the sorted list and appends every pending topic whose
    prerequisites are either already appended or not part of this topic set.
    A pass that appends nothing means a cycle (or unresolvable graph): all
    remaining topics are appended in sorted order, or with strict=True a
    CyclicPrerequisiteError is raised.

    Returns:
        A permutation of topics
    """
    sorted_topics = sort_topics(topics, current_level)
    known_names = {topic.name for topic in sorted_topics}

    ordered: list[Topic] = []
    placed_names: set[str] = set()
    pending = list(sorted_topics)

    while pending:
        still_pending = []
        for topic in pending:
            ready = all(
                prereq in placed_names or prereq not in known_names
                for prereq in topic.prerequisites
            )
            if ready:
                ordered.append(topic)
                placed_names.add(topic.name)
            else:
                still_pending.append(topic)

        if len(still_pending) == len(pending):
            unresolved = [topic.name for topic in still_pending]
            if strict:
                raise CyclicPrerequisiteError(unresolved)
            logger.warning(
                "Unresolvable prerequisites, appending %d topics as-is: %s",
                len(unresolved), ", ".join(unresolved)
            )
            ordered.extend(still_pending)
            break

        pending = still_pending

    return ordered

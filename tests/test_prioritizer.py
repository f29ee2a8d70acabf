"""Tests for study_planner.tools.prioritizer."""
import pytest

from study_planner.errors import CyclicPrerequisiteError
from study_planner.models.topic import Topic
from study_planner.tools.prioritizer import prioritize_topics, sort_topics
from study_planner.tools.topic_catalog import InMemoryTopicCatalog


def _topic(name, priority=3, prerequisites=(), difficulty="medium") -> Topic:
    return Topic(
        topic_id=f"id-{name}",
        name=name,
        description=name,
        priority=priority,
        estimated_hours=2,
        prerequisites=list(prerequisites),
        difficulty=difficulty,
    )


def _assert_prerequisites_first(ordered: list[Topic]) -> None:
    position = {topic.name: i for i, topic in enumerate(ordered)}
    for topic in ordered:
        for prereq in topic.prerequisites:
            if prereq in position:
                assert position[prereq] < position[topic.name], f"{prereq} after {topic.name}"


def test_sort_by_priority_then_prerequisite_count() -> None:
    topics = [_topic("a", 3), _topic("b", 5, ["x", "y"]), _topic("c", 5)]
    assert [t.name for t in sort_topics(topics, "intermediate")] == ["c", "b", "a"]


def test_beginners_see_easier_topics_first() -> None:
    topics = [_topic("hard", 4, difficulty="hard"), _topic("easy", 4, difficulty="easy")]
    assert [t.name for t in sort_topics(topics, "beginner")] == ["easy", "hard"]
    assert [t.name for t in sort_topics(topics, "advanced")] == ["hard", "easy"]


def test_prerequisite_is_placed_before_higher_priority_dependent() -> None:
    topics = [_topic("basics", 1), _topic("advanced", 5, ["basics"])]
    assert [t.name for t in prioritize_topics(topics, "intermediate")] == ["basics", "advanced"]


def test_unknown_prerequisites_are_ignored() -> None:
    topics = [_topic("a", 5, ["not in this plan"]), _topic("b", 4)]
    assert [t.name for t in prioritize_topics(topics, "intermediate")] == ["a", "b"]


@pytest.mark.parametrize("subject", ["JavaScript", "Python", "Data Structures", "Astronomy"])
@pytest.mark.parametrize("level", ["beginner", "intermediate", "advanced"])
def test_catalog_topics_respect_prerequisites(subject: str, level: str) -> None:
    topics = InMemoryTopicCatalog().build_topics(subject, 15, 3)
    ordered = prioritize_topics(topics, level)

    assert sorted(t.topic_id for t in ordered) == sorted(t.topic_id for t in topics)
    _assert_prerequisites_first(ordered)


def test_cycle_falls_back_to_sorted_order(caplog) -> None:
    topics = [_topic("root", 5), _topic("x", 4, ["y"]), _topic("y", 3, ["x"])]
    ordered = prioritize_topics(topics, "intermediate")

    assert [t.name for t in ordered] == ["root", "x", "y"]
    assert "Unresolvable prerequisites" in caplog.text


def test_cycle_raises_when_strict() -> None:
    topics = [_topic("x", 4, ["y"]), _topic("y", 3, ["x"])]
    with pytest.raises(CyclicPrerequisiteError) as exc_info:
        prioritize_topics(topics, "intermediate", strict=True)
    assert exc_info.value.topic_names == ["x", "y"]


def test_empty_input() -> None:
    assert prioritize_topics([], "beginner") == []

"""Tests for study_planner.tools.topic_catalog."""
import pytest

from study_planner.tools.topic_catalog import InMemoryTopicCatalog


@pytest.fixture
def catalog() -> InMemoryTopicCatalog:
    return InMemoryTopicCatalog()


@pytest.mark.parametrize("subject,goal_type,expected", [
    ("Python", "interview", 12),
    ("JavaScript", "exam", 18),
    ("Java", "job", 18),
    ("Data Structures and Algorithms", "interview", 16),
    ("Underwater Basket Weaving", "project", 9),
    ("Underwater Basket Weaving", "job", 15),
])
def test_estimate_topic_count(catalog, subject, goal_type, expected) -> None:
    assert catalog.estimate_topic_count(subject, goal_type) == expected


def test_specific_topics_set_the_count(catalog) -> None:
    assert catalog.estimate_topic_count("Python", "exam", ["Decorators", "Generators"]) == 2


@pytest.mark.parametrize("level,goal_type,expected", [
    ("beginner", "exam", 6),
    ("intermediate", "exam", 4),
    ("intermediate", "interview", 4),
    ("advanced", "project", 3),
    ("advanced", "job", 3),
])
def test_hours_per_topic(catalog, level, goal_type, expected) -> None:
    assert catalog.hours_per_topic(level, goal_type) == expected


def test_known_subject_is_truncated_to_table(catalog) -> None:
    topics = catalog.build_topics("JavaScript", 18, 6)
    assert len(topics) == 15
    assert topics[0].name == "Variables and Data Types"
    assert all(topic.estimated_hours == 6 for topic in topics)


def test_known_subject_respects_smaller_count(catalog) -> None:
    topics = catalog.build_topics("Intro to Python", 12, 4)
    assert [t.name for t in topics][:3] == ["Variables and Data Types", "Control Flow", "Functions"]
    assert len(topics) == 12


def test_generic_topics_form_a_chain(catalog) -> None:
    topics = catalog.build_topics("Organic Chemistry", 6, 2)
    assert [t.name for t in topics] == [f"Topic {i}" for i in range(1, 7)]
    assert topics[0].prerequisites == []
    assert topics[3].prerequisites == ["Topic 3"]
    assert [t.difficulty for t in topics] == ["easy", "easy", "medium", "medium", "hard", "hard"]
    assert [t.priority for t in topics] == [5, 5, 4, 4, 3, 3]


def test_specific_topics_override_table(catalog) -> None:
    topics = catalog.build_topics("Python", 12, 4, ["Asyncio", "Typing"])
    assert [t.name for t in topics] == ["Asyncio", "Typing"]
    assert all(t.category == "specific" and t.prerequisites == [] for t in topics)


def test_topic_ids_are_deterministic_and_unique(catalog) -> None:
    first = catalog.build_topics("Python", 15, 4)
    second = catalog.build_topics("Python", 15, 4)
    assert [t.topic_id for t in first] == [t.topic_id for t in second]
    assert len({t.topic_id for t in first}) == 15


def test_catalogs_do_not_share_state() -> None:
    tuned = InMemoryTopicCatalog()
    tuned.topic_count_multipliers["exam"] = 2.0
    assert InMemoryTopicCatalog().estimate_topic_count("Python", "exam") == 18

"""Subject topic catalogs: fixed tables for known subjects, generic fallback."""
import logging
import math
from typing import Optional, Protocol

from study_planner.models.goal import GoalType, SkillLevel
from study_planner.models.topic import Topic, TopicTemplate

logger = logging.getLogger(__name__)


class TopicCatalogProvider(Protocol):
    """Supplies the topic graph for a subject.

    Swap in a syllabus-derived implementation without touching the
    prioritization or allocation code.
    """

    def estimate_topic_count(
        self,
        subject: str,
        goal_type: GoalType,
        specific_topics: Optional[list[str]] = None
    ) -> int: ...

    def hours_per_topic(self, level: SkillLevel, goal_type: GoalType) -> int: ...

    def build_topics(
        self,
        subject: str,
        topic_count: int,
        hours_per_topic: float,
        specific_topics: Optional[list[str]] = None
    ) -> list[Topic]: ...

    def topics_from_names(
        self,
        subject: str,
        names: list[str],
        hours_per_topic: float,
        category: str = "custom"
    ) -> list[Topic]: ...


def _t(name, description, priority, prerequisites, difficulty, category) -> TopicTemplate:
    return TopicTemplate(
        name=name,
        description=description,
        priority=priority,
        prerequisites=list(prerequisites),
        difficulty=difficulty,
        category=category,
    )


def default_subject_tables() -> list[tuple[tuple[str, ...], list[TopicTemplate]]]:
    """Ordered (keywords, topics) pairs; first keyword match wins."""
    javascript = [
        _t("Variables and Data Types", "Learn about var, let, const and data types", 5, [], "easy", "fundamentals"),
        _t("Functions", "Function declarations, expressions, and arrow functions", 5, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Objects and Arrays", "Working with objects and arrays", 5, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Control Flow", "If statements, loops, and switch cases", 4, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Scope and Closures", "Understanding scope and closures", 4, ["Functions"], "medium", "intermediate"),
        _t("Promises and Async/Await", "Asynchronous programming", 5, ["Functions"], "medium", "intermediate"),
        _t("DOM Manipulation", "Working with the Document Object Model", 4, ["Objects and Arrays"], "medium", "web"),
        _t("Event Handling", "Handling user events", 4, ["DOM Manipulation"], "medium", "web"),
        _t("ES6+ Features", "Modern JavaScript features", 3, ["Functions", "Objects and Arrays"], "medium", "intermediate"),
        _t("Error Handling", "Try-catch and error handling", 3, ["Functions"], "easy", "fundamentals"),
        _t("Modules", "Import/export and module systems", 3, ["Functions"], "medium", "intermediate"),
        _t("Classes and OOP", "Object-oriented programming in JavaScript", 3, ["Objects and Arrays", "Functions"], "medium", "intermediate"),
        _t("Array Methods", "Map, filter, reduce, and other array methods", 4, ["Objects and Arrays", "Functions"], "medium", "intermediate"),
        _t("Fetch API", "Making HTTP requests", 4, ["Promises and Async/Await"], "medium", "web"),
        _t("Local Storage", "Browser storage APIs", 2, ["Objects and Arrays"], "easy", "web"),
    ]
    python = [
        _t("Variables and Data Types", "Python data types and variables", 5, [], "easy", "fundamentals"),
        _t("Control Flow", "If statements and loops", 5, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Functions", "Defining and using functions", 5, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Lists and Tuples", "Working with lists and tuples", 5, ["Variables and Data Types"], "easy", "fundamentals"),
        _t("Dictionaries and Sets", "Dictionary and set data structures", 4, ["Lists and Tuples"], "easy", "fundamentals"),
        _t("List Comprehensions", "Pythonic list operations", 3, ["Lists and Tuples", "Control Flow"], "medium", "intermediate"),
        _t("Classes and OOP", "Object-oriented programming", 4, ["Functions"], "medium", "intermediate"),
        _t("File I/O", "Reading and writing files", 3, ["Functions"], "easy", "fundamentals"),
        _t("Exception Handling", "Try-except blocks", 3, ["Functions"], "easy", "fundamentals"),
        _t("Modules and Packages", "Importing and creating modules", 3, ["Functions"], "medium", "intermediate"),
        _t("Decorators", "Function decorators", 2, ["Functions"], "hard", "advanced"),
        _t("Generators", "Generator functions and expressions", 2, ["Functions"], "hard", "advanced"),
        _t("Lambda Functions", "Anonymous functions", 3, ["Functions"], "medium", "intermediate"),
        _t("Regular Expressions", "Pattern matching with regex", 2, ["Variables and Data Types"], "medium", "intermediate"),
        _t("Virtual Environments", "Managing Python environments", 2, ["Modules and Packages"], "easy", "tools"),
    ]
    dsa = [
        _t("Arrays and Strings", "Basic array and string operations", 5, [], "easy", "fundamentals"),
        _t("Linked Lists", "Singly and doubly linked lists", 5, ["Arrays and Strings"], "medium", "fundamentals"),
        _t("Stacks and Queues", "Stack and queue data structures", 5, ["Arrays and Strings"], "medium", "fundamentals"),
        _t("Hash Tables", "Hash maps and hash sets", 5, ["Arrays and Strings"], "medium", "fundamentals"),
        _t("Trees", "Binary trees and tree traversal", 4, ["Linked Lists"], "medium", "intermediate"),
        _t("Binary Search Trees", "BST operations", 4, ["Trees"], "medium", "intermediate"),
        _t("Heaps", "Min heap and max heap", 4, ["Trees"], "medium", "intermediate"),
        _t("Graphs", "Graph representation and traversal", 4, ["Trees"], "hard", "intermediate"),
        _t("Sorting Algorithms", "Quick sort, merge sort, etc.", 5, ["Arrays and Strings"], "medium", "algorithms"),
        _t("Searching Algorithms", "Binary search and variations", 5, ["Arrays and Strings"], "easy", "algorithms"),
        _t("Dynamic Programming", "DP concepts and patterns", 3, ["Arrays and Strings"], "hard", "algorithms"),
        _t("Greedy Algorithms", "Greedy approach problems", 3, ["Arrays and Strings"], "medium", "algorithms"),
        _t("Backtracking", "Backtracking problems", 3, ["Arrays and Strings"], "hard", "algorithms"),
        _t("Two Pointers", "Two pointer technique", 4, ["Arrays and Strings"], "medium", "techniques"),
        _t("Sliding Window", "Sliding window technique", 4, ["Arrays and Strings"], "medium", "techniques"),
    ]
    return [
        (("javascript",), javascript),
        (("python",), python),
        (("data structures", "algorithms"), dsa),
    ]


def default_topic_counts() -> list[tuple[str, int]]:
    """Ordered base topic counts; 'javascript' precedes 'java' on purpose."""
    return [
        ("javascript", 15),
        ("python", 15),
        ("java", 18),
        ("react", 12),
        ("node", 12),
        ("data structures", 20),
        ("algorithms", 25),
        ("system design", 15),
        ("database", 12),
        ("sql", 10),
        ("aws", 20),
        ("machine learning", 18),
        ("web development", 20),
    ]


class InMemoryTopicCatalog:
    """Default catalog seeded from the fixed subject tables.

    All tables and multipliers are instance state so separate catalogs (and
    requests) never share mutable data.
    """

    def __init__(
        self,
        subject_tables: Optional[list[tuple[tuple[str, ...], list[TopicTemplate]]]] = None,
        topic_counts: Optional[list[tuple[str, int]]] = None,
        default_topic_count: int = 15,
    ):
        self.subject_tables = subject_tables if subject_tables is not None else default_subject_tables()
        self.topic_counts = topic_counts if topic_counts is not None else default_topic_counts()
        self.default_topic_count = default_topic_count
        self.topic_count_multipliers: dict[str, float] = {
            "exam": 1.2,       # broad coverage
            "interview": 0.8,  # key topics only
            "project": 0.6,    # specific skills
            "job": 1.0,
        }
        self.base_hours_by_level: dict[str, float] = {
            "beginner": 4,
            "intermediate": 3,
            "advanced": 2,
        }
        self.hours_multipliers: dict[str, float] = {
            "exam": 1.3,
            "interview": 1.2,
            "project": 1.5,
            "job": 1.1,
        }

    def match_table(self, subject: str) -> Optional[list[TopicTemplate]]:
        """Return the first fixed table whose keyword occurs in subject."""
        subject_lower = subject.lower()
        for keywords, templates in self.subject_tables:
            if any(keyword in subject_lower for keyword in keywords):
                return templates
        return None

    def estimate_topic_count(
        self,
        subject: str,
        goal_type: GoalType,
        specific_topics: Optional[list[str]] = None
    ) -> int:
        """Requested number of topics (may exceed a fixed table's length)."""
        if specific_topics:
            return len(specific_topics)

        subject_lower = subject.lower()
        base_count = self.default_topic_count
        for key, count in self.topic_counts:
            if key in subject_lower:
                base_count = count
                break

        # Drop float noise before rounding up
        scaled = base_count * self.topic_count_multipliers.get(goal_type, 1.0)
        return math.ceil(round(scaled, 9))

    def hours_per_topic(self, level: SkillLevel, goal_type: GoalType) -> int:
        """Study hours per topic for a skill level and goal type, rounded up."""
        base_hours = self.base_hours_by_level.get(level, 3)
        scaled = base_hours * self.hours_multipliers.get(goal_type, 1.0)
        return math.ceil(round(scaled, 9))

    def build_topics(
        self,
        subject: str,
        topic_count: int,
        hours_per_topic: float,
        specific_topics: Optional[list[str]] = None
    ) -> list[Topic]:
        """
        Build the topic list for a goal.

        Specific topics win. Otherwise the first matching fixed table supplies
        at most topic_count topics (never more than its length); with no match
        topic_count generic topics form a linear prerequisite chain.
        """
        if specific_topics:
            return self.topics_from_names(subject, specific_topics, hours_per_topic, "specific")

        templates = self.match_table(subject)
        if templates is None:
            return self._generic_topics(subject, topic_count, hours_per_topic)

        if topic_count > len(templates):
            logger.info(
                "Catalog for '%s' has %d topics; %d requested, truncating",
                subject, len(templates), topic_count
            )
        return [
            Topic(
                topic_id=Topic.generate_topic_id(subject, template.name, index),
                name=template.name,
                description=template.description,
                priority=template.priority,
                estimated_hours=hours_per_topic,
                prerequisites=list(template.prerequisites),
                difficulty=template.difficulty,
                category=template.category,
            )
            for index, template in enumerate(templates[:topic_count])
        ]

    def topics_from_names(
        self,
        subject: str,
        names: list[str],
        hours_per_topic: float,
        category: str = "custom"
    ) -> list[Topic]:
        """Plain medium-priority topics with no prerequisites."""
        return [
            Topic(
                topic_id=Topic.generate_topic_id(subject, name, index),
                name=name,
                description=f"Study {name}",
                priority=3,
                estimated_hours=hours_per_topic,
                prerequisites=[],
                difficulty="medium",
                category=category,
            )
            for index, name in enumerate(names)
        ]

    def _generic_topics(self, subject: str, count: int, hours_per_topic: float) -> list[Topic]:
        """Thirds of easy/medium/hard topics, each requiring its predecessor."""
        topics = []
        for i in range(count):
            if i < count / 3:
                priority, difficulty, category = 5, "easy", "fundamentals"
            elif i < 2 * count / 3:
                priority, difficulty, category = 4, "medium", "intermediate"
            else:
                priority, difficulty, category = 3, "hard", "advanced"

            name = f"Topic {i + 1}"
            topics.append(Topic(
                topic_id=Topic.generate_topic_id(subject, name, i),
                name=name,
                description=f"Study topic {i + 1} for {subject}",
                priority=priority,
                estimated_hours=hours_per_topic,
                prerequisites=[f"Topic {i}"] if i > 0 else [],
                difficulty=difficulty,
                category=category,
            ))
        return topics

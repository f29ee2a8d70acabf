"""Topic names from syllabus documents (LLM extraction with heuristic fallback)."""
import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

from google import genai
from google.genai import types
from pydantic import ValidationError

from study_planner.models.syllabus import SyllabusTopics

logger = logging.getLogger(__name__)


class SyllabusTopicSource(Protocol):
    """Supplies topic names for uploaded syllabus documents."""

    def get_topic_names(self, user_id: str, document_ids: list[str]) -> list[str]: ...


class FileSyllabusTopicSource:
    """Reads <document_id>.json SyllabusTopics files from a directory (ids URL-quoted)."""

    def __init__(self, topics_dir: Path):
        self.topics_dir = Path(topics_dir)

    def _path(self, document_id: str) -> Path:
        return self.topics_dir / f"{quote(document_id, safe='')}.json"

    def load(self, document_id: str) -> Optional[SyllabusTopics]:
        path = self._path(document_id)
        if not path.exists():
            return None
        try:
            return SyllabusTopics.model_validate_json(path.read_text())
        except (OSError, ValidationError) as e:
            logger.warning("Could not read syllabus topics %s: %s", path.name, e)
            return None

    def save(self, syllabus: SyllabusTopics) -> Path:
        """Write topics for one document (temp file then replace)."""
        self.topics_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(syllabus.document_id)
        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(syllabus.model_dump_json(indent=2, by_alias=True))
        temp_path.replace(path)
        return path

    def get_topic_names(self, user_id: str, document_ids: list[str]) -> list[str]:
        """Topic names across documents, in document order, without repeats."""
        names = []
        seen = set()
        for document_id in document_ids:
            syllabus = self.load(document_id)
            if syllabus is None:
                logger.info("No extracted topics for syllabus %s", document_id)
                continue
            for name in syllabus.topics:
                if name.lower() not in seen:
                    seen.add(name.lower())
                    names.append(name)
        return names


def extract_syllabus_topics(
    document_id: str,
    text: str,
    max_chars: int = 8000,
    model: str = "gemini-2.5-flash"
) -> SyllabusTopics:
    """
    Extract ordered topic names from already-extracted syllabus text.

    Uses Gemini when GOOGLE_API_KEY is set; falls back to a line heuristic
    when the key is missing or the LLM call fails.
    """
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        return _fallback_extract(document_id, text)

    client = genai.Client(api_key=api_key)

    text_to_analyze = text[:max_chars]
    if len(text) > max_chars:
        text_to_analyze += "\n[...truncated...]"

    prompt = f"""List the study topics covered by this course syllabus, in teaching order.

Return JSON:
{{
  "topics": ["Topic name 1", "Topic name 2"]
}}

Use short topic names (2-6 words). Skip grading, policies and logistics.

Syllabus:
{text_to_analyze}"""

    try:
        response = client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=0.1,
                response_mime_type="application/json"
            )
        )
        data = json.loads(response.text)
        syllabus = SyllabusTopics(
            document_id=document_id,
            topics=data.get("topics", []),
            method="llm",
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        if syllabus.topics:
            return syllabus
        logger.warning("LLM returned no topics for %s, using heuristic", document_id)
    except (ValidationError, ValueError, AttributeError) as e:
        logger.warning("Malformed LLM response for %s: %s", document_id, e)
    except Exception as e:
        logger.warning("Syllabus topic extraction failed for %s: %s", document_id, e)

    return _fallback_extract(document_id, text)


# "Week 3: Trees", "Lecture 4 - Sorting", "Unit 2. Graphs", "3) Heaps", "- Hashing"
_TOPIC_LINE = re.compile(
    r"^\s*(?:(?:week|lecture|unit|module|chapter|topic|session)\s*\d+\s*[:.\-)]|\d+\s*[.)]|[-*•])\s*(?P<name>.+?)\s*$",
    re.IGNORECASE,
)
_SKIP_WORDS = ("grading", "grade", "office hours", "attendance", "policy", "exam", "midterm", "final", "holiday", "no class")


def _fallback_extract(document_id: str, text: str) -> SyllabusTopics:
    """Heuristic: numbered/bulleted schedule lines that are not logistics."""
    topics = []
    for line in text.splitlines():
        match = _TOPIC_LINE.match(line)
        if not match:
            continue
        name = match.group("name").strip(" .:-")
        if not name or len(name) > 80:
            continue
        if any(word in name.lower() for word in _SKIP_WORDS):
            continue
        topics.append(name)

    return SyllabusTopics(
        document_id=document_id,
        topics=topics,
        method="heuristic",
        generated_at=datetime.now(timezone.utc).isoformat(),
    )

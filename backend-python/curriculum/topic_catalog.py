"""
Topic Catalog

Read-only, indexed snapshot of curriculum topic records. A catalog is built
once per load and never mutated afterwards, so a single instance can be
shared by concurrent requests.
"""

from typing import Dict, Any, List, Optional, Tuple, Iterable, Iterator
from collections import defaultdict
from pydantic import ValidationError
import logging

from models.schemas import DifficultyLevel, Topic


# Seed files use camelCase keys
_RECORD_ALIASES = {
    "gradeId": "grade_id",
    "subjectId": "subject_id",
    "estimatedHours": "estimated_hours",
    "sortOrder": "sort_order",
    "isActive": "is_active",
    "displayName": "display_name",
}


class TopicCatalog:
    """Immutable topic collection with lookup indexes"""

    def __init__(self, topics: Iterable[Topic] = ()):
        self.logger = logging.getLogger("TopicCatalog")
        self._by_id: Dict[str, Topic] = {}

        for topic in topics:
            if topic.id in self._by_id:
                self.logger.warning(f"Duplicate topic id {topic.id} in catalog, keeping last record")
            self._by_id[topic.id] = topic

        by_pair: Dict[Tuple[str, str], List[Topic]] = defaultdict(list)
        by_skill: Dict[str, List[str]] = defaultdict(list)
        for topic in self._by_id.values():
            if topic.is_active:
                by_pair[(topic.grade_id, topic.subject_id)].append(topic)
            for skill in topic.skills:
                by_skill[skill].append(topic.id)

        self._by_grade_subject: Dict[Tuple[str, str], Tuple[str, ...]] = {
            pair: tuple(t.id for t in sorted(members, key=lambda t: (t.sort_order, t.id)))
            for pair, members in by_pair.items()
        }
        self._by_skill: Dict[str, Tuple[str, ...]] = {
            skill: tuple(ids) for skill, ids in by_skill.items()
        }

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "TopicCatalog":
        """
        Build a catalog from plain topic records.

        Accepts snake_case keys or the camelCase keys used by the content
        seed files. Invalid records are skipped and logged.

        Args:
            records: Iterable of topic dicts

        Returns:
            New TopicCatalog
        """
        logger = logging.getLogger("TopicCatalog")
        topics = []
        skipped = 0

        for record in records:
            normalized = {_RECORD_ALIASES.get(key, key): value for key, value in record.items()}
            for key in ("prerequisites", "skills"):
                value = normalized.get(key)
                if value is None:
                    normalized[key] = ()
                elif isinstance(value, (list, tuple)):
                    normalized[key] = tuple(value)
                # Anything else, including a bare string, is left for validation to reject
            try:
                topics.append(Topic.model_validate(normalized))
            except ValidationError as e:
                skipped += 1
                logger.warning(f"Skipping invalid topic record {record.get('id')!r}: {e.error_count()} error(s)")

        if skipped:
            logger.warning(f"Skipped {skipped} invalid topic record(s)")
        return cls(topics)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._by_id

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._by_id.values())

    def get(self, topic_id: str) -> Optional[Topic]:
        return self._by_id.get(topic_id)

    def all_topics(self) -> List[Topic]:
        """All topics sorted by grade, subject, then sort order"""
        return sorted(self._by_id.values(), key=lambda t: (t.grade_id, t.subject_id, t.sort_order, t.id))

    def topics_by_grade(self, grade: str) -> List[Topic]:
        return sorted(
            (t for t in self._by_id.values() if t.grade_id == grade and t.is_active),
            key=lambda t: (t.subject_id, t.sort_order, t.id)
        )

    def topics_by_subject(self, subject: str) -> List[Topic]:
        return sorted(
            (t for t in self._by_id.values() if t.subject_id == subject and t.is_active),
            key=lambda t: (t.grade_id, t.sort_order, t.id)
        )

    def topics_by_grade_and_subject(self, grade: str, subject: str) -> List[Topic]:
        """Active topics of a grade/subject pair in sort order"""
        ids = self._by_grade_subject.get((grade, subject), ())
        return [self._by_id[topic_id] for topic_id in ids]

    def topics_by_difficulty(self, difficulty: DifficultyLevel) -> List[Topic]:
        return sorted(
            (t for t in self._by_id.values() if t.difficulty == difficulty and t.is_active),
            key=lambda t: (t.sort_order, t.id)
        )

    def topics_by_skill(self, skill: str) -> List[Topic]:
        topics = (self._by_id[topic_id] for topic_id in self._by_skill.get(skill, ()))
        return [t for t in topics if t.is_active]

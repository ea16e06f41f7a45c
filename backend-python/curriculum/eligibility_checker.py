"""
Topic Eligibility Checker

Decides whether a learner may start a topic given the topics they have
completed, and suggests related lower-difficulty topics worth doing first.
"""

from typing import List, Optional, Iterable
from curriculum.topic_catalog import TopicCatalog
from curriculum.graph_resolver import GraphResolver
from models.schemas import PrerequisiteCheckResult, Topic, TopicProgression
import logging


class EligibilityChecker:
    """Checks required and recommended prerequisites for a learner"""

    def __init__(self, catalog: TopicCatalog, resolver: Optional[GraphResolver] = None):
        self.catalog = catalog
        self.resolver = resolver or GraphResolver(catalog)
        self.logger = logging.getLogger("EligibilityChecker")

    def check_prerequisites(self, topic_id: str, completed_topic_ids: Iterable[str]) -> PrerequisiteCheckResult:
        """
        Check whether a topic can be started.

        Args:
            topic_id: Topic the learner wants to start
            completed_topic_ids: Topics the learner has finished

        Returns:
            PrerequisiteCheckResult; unknown topics cannot be started and
            carry empty lists
        """
        topic = self.catalog.get(topic_id)
        if topic is None:
            self.logger.debug(f"Prerequisite check for unknown topic {topic_id}")
            return PrerequisiteCheckResult(can_start=False)

        completed = set(completed_topic_ids)
        missing = [p for p in topic.prerequisites if p not in completed]

        return PrerequisiteCheckResult(
            can_start=not missing,
            missing=missing,
            recommended=self._recommended_for(topic, completed),
            chain=self.resolver.prerequisite_chain(topic_id)
        )

    def recommended_prerequisites(self, topic_id: str, completed_topic_ids: Iterable[str]) -> List[str]:
        """
        Topics that would help before starting topic_id but are not required.

        A topic is recommended when it is active, in the same grade and
        subject, at a strictly lower difficulty, shares a skill, and is
        neither completed nor already a direct prerequisite.
        """
        topic = self.catalog.get(topic_id)
        if topic is None:
            return []
        return self._recommended_for(topic, set(completed_topic_ids))

    def _recommended_for(self, topic: Topic, completed: set) -> List[str]:
        skills = set(topic.skills)
        return [
            candidate.id
            for candidate in self.catalog.topics_by_grade_and_subject(topic.grade_id, topic.subject_id)
            if candidate.id != topic.id
            and candidate.difficulty.rank < topic.difficulty.rank
            and skills.intersection(candidate.skills)
            and candidate.id not in completed
            and candidate.id not in topic.prerequisites
        ]

    def topic_progression(self, topic_id: str) -> Optional[TopicProgression]:
        """
        Where a topic sits in its curriculum: what it needs, what it unlocks
        and which sibling topics cover overlapping skills.

        Returns:
            TopicProgression, or None for an unknown topic
        """
        topic = self.catalog.get(topic_id)
        if topic is None:
            return None

        skills = set(topic.skills)
        related = [
            t for t in self.catalog.topics_by_grade_and_subject(topic.grade_id, topic.subject_id)
            if t.id != topic.id
            and skills.intersection(t.skills)
            and topic.id not in t.prerequisites
            and t.id not in topic.prerequisites
        ]

        return TopicProgression(
            current_topic=topic,
            prerequisites=self.resolver.direct_prerequisites(topic_id),
            next_topics=self.resolver.dependents(topic_id),
            related_topics=related
        )

    def available_topics(self, ordered_topics: Iterable[Topic], completed_topic_ids: Iterable[str]) -> List[Topic]:
        """
        Topics from ordered_topics the learner could start right now.

        Args:
            ordered_topics: Candidate topics, typically a learning path
            completed_topic_ids: Topics the learner has finished

        Returns:
            Not-yet-completed topics whose direct prerequisites are all done,
            in the order given
        """
        completed = set(completed_topic_ids)
        return [
            t for t in ordered_topics
            if t.id not in completed and all(p in completed for p in t.prerequisites)
        ]

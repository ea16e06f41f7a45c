"""
Learning Path Builder

Orders the active topics of a grade/subject so that prerequisites come
before the topics that depend on them.
"""

from typing import Dict, List, Iterable, Iterator, Tuple
from collections import Counter
from curriculum.topic_catalog import TopicCatalog
from models.schemas import Topic, TopicHierarchy, TopicSummary
import logging


IN_PROGRESS = 1
DONE = 2


class PathBuilder:
    """Builds topologically ordered learning paths"""

    def __init__(self, catalog: TopicCatalog):
        self.catalog = catalog
        self.logger = logging.getLogger("PathBuilder")

    def learning_path(self, grade: str, subject: str) -> List[Topic]:
        """
        Get the learning path for a subject in a grade.

        Iterative depth-first topological sort over the active topics of the
        pair, started in sort order so ties are deterministic. Prerequisites
        outside the pair are ignored. A prerequisite that is still in
        progress closes a cycle and is skipped rather than re-entered.

        Args:
            grade: Grade identifier
            subject: Subject identifier

        Returns:
            Ordered topics, each exactly once; empty for an unknown pair
        """
        topics = self.catalog.topics_by_grade_and_subject(grade, subject)
        members: Dict[str, Topic] = {t.id: t for t in topics}
        state: Dict[str, int] = {}
        ordered: List[Topic] = []

        for start in topics:
            if start.id in state:
                continue

            state[start.id] = IN_PROGRESS
            stack: List[Tuple[Topic, Iterator[str]]] = [(start, iter(start.prerequisites))]

            while stack:
                topic, prereqs = stack[-1]
                prereq_id = next(prereqs, None)

                if prereq_id is None:
                    stack.pop()
                    state[topic.id] = DONE
                    ordered.append(topic)
                    continue

                prereq = members.get(prereq_id)
                if prereq is None:
                    continue

                status = state.get(prereq_id)
                if status == IN_PROGRESS:
                    self.logger.warning(
                        f"Circular prerequisite {topic.id} -> {prereq_id} skipped in path {grade}/{subject}"
                    )
                    continue
                if status == DONE:
                    continue

                state[prereq_id] = IN_PROGRESS
                stack.append((prereq, iter(prereq.prerequisites)))

        self.logger.debug(f"Built learning path {grade}/{subject} with {len(ordered)} topics")
        return ordered

    def estimated_completion_hours(self, topic_ids: Iterable[str]) -> float:
        """Total estimated hours for a sequence; unknown ids count as zero"""
        total = 0.0
        for topic_id in topic_ids:
            topic = self.catalog.get(topic_id)
            if topic is not None:
                total += topic.estimated_hours
        return total

    def topic_hierarchy(self, grade: str, subject: str) -> TopicHierarchy:
        """
        Summarize the topics of a grade/subject pair.

        Returns:
            TopicHierarchy with per-topic summaries in sort order, total hours
            and a count of topics per difficulty level
        """
        topics = self.catalog.topics_by_grade_and_subject(grade, subject)

        summaries = [
            TopicSummary(
                id=t.id,
                display_name=t.label,
                difficulty=t.difficulty,
                estimated_hours=t.estimated_hours,
                prerequisite_count=len(t.prerequisites),
                skill_count=len(t.skills),
                sort_order=t.sort_order
            )
            for t in topics
        ]

        return TopicHierarchy(
            grade=grade,
            subject=subject,
            topics=summaries,
            total_estimated_hours=sum(t.estimated_hours for t in topics),
            difficulty_distribution=dict(Counter(t.difficulty for t in topics))
        )

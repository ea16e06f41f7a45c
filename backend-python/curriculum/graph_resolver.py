"""
Prerequisite Graph Resolver

Expands a topic's prerequisites into the full transitive chain, ordered so
that every topic comes after the topics it depends on.
"""

from typing import List, Set, Iterator, Tuple
from curriculum.topic_catalog import TopicCatalog
from models.schemas import Topic
import logging


class GraphResolver:
    """Resolves transitive prerequisite chains over a catalog snapshot"""

    def __init__(self, catalog: TopicCatalog):
        self.catalog = catalog
        self.logger = logging.getLogger("GraphResolver")

    def prerequisite_chain(self, topic_id: str) -> List[str]:
        """
        Get the complete prerequisite chain for a topic.

        Depth-first expansion: each prerequisite's own chain is placed before
        the prerequisite itself. An id that was already visited during this
        call is not expanded again, which both removes duplicates and
        truncates cycles. Prerequisite ids missing from the catalog are
        skipped.

        Args:
            topic_id: Target topic ID

        Returns:
            Ordered list of prerequisite topic IDs (never includes topic_id)
        """
        root = self.catalog.get(topic_id)
        if root is None:
            return []

        chain: List[str] = []
        emitted: Set[str] = set()
        visited: Set[str] = {topic_id}
        on_path: Set[str] = {topic_id}
        stack: List[Tuple[Topic, Iterator[str]]] = [(root, iter(root.prerequisites))]

        while stack:
            topic, prereqs = stack[-1]
            prereq_id = next(prereqs, None)

            if prereq_id is None:
                stack.pop()
                on_path.discard(topic.id)
                if topic.id != topic_id and topic.id not in emitted:
                    emitted.add(topic.id)
                    chain.append(topic.id)
                continue

            if prereq_id in visited:
                if prereq_id in on_path:
                    self.logger.warning(f"Circular prerequisite {topic.id} -> {prereq_id} ignored while resolving {topic_id}")
                # Cycle members are emitted where first re-encountered
                if prereq_id != topic_id and prereq_id not in emitted:
                    emitted.add(prereq_id)
                    chain.append(prereq_id)
                continue

            prereq = self.catalog.get(prereq_id)
            if prereq is None:
                self.logger.debug(f"Topic {topic.id} references unknown prerequisite {prereq_id}")
                continue

            visited.add(prereq_id)
            on_path.add(prereq_id)
            stack.append((prereq, iter(prereq.prerequisites)))

        return chain

    def direct_prerequisites(self, topic_id: str) -> List[Topic]:
        """Known direct prerequisites of a topic, in declared order"""
        topic = self.catalog.get(topic_id)
        if topic is None:
            return []
        return [p for p in (self.catalog.get(pid) for pid in topic.prerequisites) if p is not None]

    def dependents(self, topic_id: str) -> List[Topic]:
        """Active topics that list topic_id as a direct prerequisite"""
        return [
            t for t in self.catalog.all_topics()
            if t.is_active and topic_id in t.prerequisites
        ]

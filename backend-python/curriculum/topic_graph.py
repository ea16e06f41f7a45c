"""
Topic Graph Service

Single entry point over one catalog snapshot: prerequisite chains,
eligibility, learning paths and path validation.
"""

from typing import List, Optional, Iterable, Sequence
from curriculum.topic_catalog import TopicCatalog
from curriculum.graph_resolver import GraphResolver
from curriculum.eligibility_checker import EligibilityChecker
from curriculum.path_builder import PathBuilder
from curriculum.progression_validator import ProgressionValidator
from curriculum.catalog_provider import CatalogProvider
from models.schemas import (
    PrerequisiteCheckResult,
    Topic,
    TopicHierarchy,
    TopicProgression,
    ValidationResult
)


class TopicGraphService:
    """Wires the graph components to a single catalog snapshot"""

    def __init__(self, catalog: TopicCatalog):
        self.catalog = catalog
        self.resolver = GraphResolver(catalog)
        self.checker = EligibilityChecker(catalog, self.resolver)
        self.builder = PathBuilder(catalog)
        self.validator = ProgressionValidator(catalog, self.checker)

    @classmethod
    def for_provider(cls, provider: CatalogProvider) -> "TopicGraphService":
        """Bind to the provider's snapshot as of now; later reloads don't affect it"""
        return cls(provider.current())

    def prerequisite_chain(self, topic_id: str) -> List[str]:
        return self.resolver.prerequisite_chain(topic_id)

    def check_prerequisites(self, topic_id: str, completed_topic_ids: Iterable[str]) -> PrerequisiteCheckResult:
        return self.checker.check_prerequisites(topic_id, completed_topic_ids)

    def topic_progression(self, topic_id: str) -> Optional[TopicProgression]:
        return self.checker.topic_progression(topic_id)

    def learning_path(self, grade: str, subject: str) -> List[Topic]:
        return self.builder.learning_path(grade, subject)

    def available_topics(self, grade: str, subject: str, completed_topic_ids: Iterable[str]) -> List[Topic]:
        """Topics of the grade/subject path the learner can start next"""
        return self.checker.available_topics(self.learning_path(grade, subject), completed_topic_ids)

    def topic_hierarchy(self, grade: str, subject: str) -> TopicHierarchy:
        return self.builder.topic_hierarchy(grade, subject)

    def estimated_completion_hours(self, topic_ids: Iterable[str]) -> float:
        return self.builder.estimated_completion_hours(topic_ids)

    def validate_learning_path(self, topic_ids: Sequence[str]) -> ValidationResult:
        return self.validator.validate_learning_path(topic_ids)

    def validate_difficulty_progression(self, topic_ids: Sequence[str]) -> ValidationResult:
        return self.validator.validate_difficulty_progression(topic_ids)

"""
Learning Path Progression Validator

Checks learner-supplied or generated topic sequences. Structural problems
(unknown ids, duplicates, prerequisites placed after their dependents) are
errors and invalidate the path; uneven difficulty is only a warning.
"""

from typing import Dict, List, Iterable, Optional, Sequence, Set
from curriculum.topic_catalog import TopicCatalog
from curriculum.eligibility_checker import EligibilityChecker
from models.schemas import Topic, ValidationResult
import logging


class ProgressionValidator:
    """Validates topic sequences against the catalog"""

    # Tiers a single step may move up or down without a warning
    MAX_TIER_STEP = 1

    def __init__(self, catalog: TopicCatalog, checker: Optional[EligibilityChecker] = None):
        self.catalog = catalog
        self.checker = checker or EligibilityChecker(catalog)
        self.logger = logging.getLogger("ProgressionValidator")

    def validate_topic_id(self, topic_id: str) -> ValidationResult:
        if not topic_id or not topic_id.strip():
            return ValidationResult(valid=False, errors=["Topic ID cannot be empty"])

        topic = self.catalog.get(topic_id)
        if topic is None:
            return ValidationResult(valid=False, errors=[f"Invalid topic ID: {topic_id}"])

        warnings = []
        if not topic.is_active:
            warnings.append(f"Topic {topic_id} is not currently active")
        return ValidationResult(valid=True, warnings=warnings)

    def validate_topic_prerequisites(self, topic_id: str, completed_topic_ids: Iterable[str]) -> ValidationResult:
        """
        Explain in words whether a learner may start a topic.

        Missing required prerequisites are an error, recommended topics a
        warning.
        """
        result = self.checker.check_prerequisites(topic_id, completed_topic_ids)
        errors = []
        warnings = []

        if not result.can_start:
            topic = self.catalog.get(topic_id)
            if topic is None:
                errors.append(f"Invalid topic ID: {topic_id}")
            else:
                errors.append(
                    f"Cannot start {topic.label}. Missing prerequisites: {self._labels(result.missing)}"
                )

        if result.recommended:
            warnings.append(f"Recommended topics for better success: {self._labels(result.recommended)}")

        return ValidationResult(valid=result.can_start, errors=errors, warnings=warnings)

    def validate_learning_path(self, topic_ids: Sequence[str]) -> ValidationResult:
        """
        Validate an ordered topic sequence.

        Args:
            topic_ids: Ordered topic IDs

        Returns:
            ValidationResult; invalid on empty input, unknown ids, duplicates
            or prerequisite order violations
        """
        if not topic_ids:
            return ValidationResult(valid=False, errors=["Learning path cannot be empty"])

        errors: List[str] = []
        warnings: List[str] = []

        for topic_id in topic_ids:
            check = self.validate_topic_id(topic_id)
            errors.extend(check.errors)
            warnings.extend(check.warnings)
        all_known = not errors

        duplicates: List[str] = []
        last_index: Dict[str, int] = {}
        for index, topic_id in enumerate(topic_ids):
            if topic_id in last_index and topic_id not in duplicates:
                duplicates.append(topic_id)
            last_index[topic_id] = index
        if duplicates:
            errors.append(f"Duplicate topics found: {', '.join(duplicates)}")

        # Repeated ids are checked at their first position only
        checked: Set[str] = set()
        for index, topic_id in enumerate(topic_ids):
            topic = self.catalog.get(topic_id)
            if topic is None or topic_id in checked:
                continue
            checked.add(topic_id)
            for prereq_id in topic.prerequisites:
                if last_index.get(prereq_id, -1) > index:
                    errors.append(f"Prerequisite order violation: {prereq_id} must come before {topic_id}")

        if all_known:
            warnings.extend(self.validate_difficulty_progression(topic_ids).warnings)

        if errors:
            self.logger.info(f"Learning path of {len(topic_ids)} topics rejected with {len(errors)} error(s)")
        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def validate_difficulty_progression(self, topic_ids: Sequence[str]) -> ValidationResult:
        """
        Flag abrupt difficulty changes between consecutive topics.

        A rise or drop of more than one tier yields a warning naming both
        topics. Warnings never invalidate; unknown ids do.
        """
        unknown = [topic_id for topic_id in topic_ids if topic_id not in self.catalog]
        if unknown:
            return ValidationResult(
                valid=False,
                errors=[f"Some topics in the progression are invalid: {', '.join(unknown)}"]
            )

        topics = [self.catalog.get(topic_id) for topic_id in topic_ids]
        warnings = []

        for previous, current in zip(topics, topics[1:]):
            step = current.difficulty.rank - previous.difficulty.rank
            if step < -self.MAX_TIER_STEP:
                warnings.append(
                    f"Significant difficulty drop from {self._describe(previous)} to {self._describe(current)}"
                )
            elif step > self.MAX_TIER_STEP:
                warnings.append(
                    f"Large difficulty jump from {self._describe(previous)} to {self._describe(current)}"
                )

        return ValidationResult(valid=True, warnings=warnings)

    @staticmethod
    def _describe(topic: Topic) -> str:
        if topic.display_name:
            return f"{topic.display_name} ({topic.id})"
        return topic.id

    def _labels(self, topic_ids: Iterable[str]) -> str:
        labels = []
        for topic_id in topic_ids:
            topic = self.catalog.get(topic_id)
            labels.append(topic.label if topic is not None else topic_id)
        return ", ".join(labels)

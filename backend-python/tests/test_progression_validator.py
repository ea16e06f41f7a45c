"""
Unit Tests for Progression Validator

Tests structural path validation (empty, unknown, duplicate, out-of-order
topics) and advisory difficulty warnings.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from curriculum.progression_validator import ProgressionValidator
from curriculum.path_builder import PathBuilder
from curriculum.topic_catalog import TopicCatalog
from conftest import make_topic


@pytest.fixture
def validator(catalog):
    return ProgressionValidator(catalog)


@pytest.fixture
def tiered_catalog():
    return TopicCatalog([
        make_topic("beginner", difficulty="BEGINNER"),
        make_topic("intermediate", difficulty="INTERMEDIATE"),
        make_topic("advanced", difficulty="ADVANCED"),
        make_topic("mastery", difficulty="MASTERY"),
    ])


# ============================================================================
# Learning path validation
# ============================================================================

def test_valid_learning_path(validator):
    result = validator.validate_learning_path([
        "k-math-counting-1-10",
        "k-math-number-recognition",
        "k-math-simple-addition",
    ])

    assert result.valid is True
    assert result.errors == []


def test_empty_learning_path(validator):
    result = validator.validate_learning_path([])

    assert result.valid is False
    assert result.errors == ["Learning path cannot be empty"]


def test_unknown_topic_invalidates_path(validator):
    result = validator.validate_learning_path(["k-math-counting-1-10", "invalid-topic"])

    assert result.valid is False
    assert "Invalid topic ID: invalid-topic" in result.errors


def test_duplicate_topic_invalidates_path(validator):
    result = validator.validate_learning_path(["k-math-counting-1-10", "k-math-counting-1-10"])

    assert result.valid is False
    assert any("Duplicate" in e and "k-math-counting-1-10" in e for e in result.errors)


def test_prerequisite_after_dependent_invalidates_path(validator):
    result = validator.validate_learning_path(["k-math-simple-addition", "k-math-counting-1-10"])

    assert result.valid is False
    assert result.errors == [
        "Prerequisite order violation: k-math-counting-1-10 must come before k-math-simple-addition"
    ]


def test_repeated_dependent_reports_order_violation_once(validator):
    result = validator.validate_learning_path([
        "k-math-number-recognition",
        "k-math-number-recognition",
        "k-math-counting-1-10",
    ])

    assert result.valid is False
    assert result.errors == [
        "Duplicate topics found: k-math-number-recognition",
        "Prerequisite order violation: k-math-counting-1-10 must come before k-math-number-recognition",
    ]


def test_prerequisites_outside_sequence_are_not_errors(validator):
    # A learner may already have finished the earlier topics
    result = validator.validate_learning_path(["k-math-simple-addition", "k-math-basic-shapes"])
    assert result.valid is True


def test_inactive_topic_is_a_warning():
    catalog = TopicCatalog([make_topic("retired", active=False)])
    result = ProgressionValidator(catalog).validate_learning_path(["retired"])

    assert result.valid is True
    assert result.warnings == ["Topic retired is not currently active"]


def test_learning_path_includes_difficulty_warnings(tiered_catalog):
    result = ProgressionValidator(tiered_catalog).validate_learning_path(["beginner", "mastery"])

    assert result.valid is True
    assert result.warnings == ["Large difficulty jump from beginner to mastery"]


def test_built_paths_validate(catalog, validator):
    builder = PathBuilder(catalog)
    pairs = {(t.grade_id, t.subject_id) for t in catalog}
    for grade, subject in pairs:
        ids = [t.id for t in builder.learning_path(grade, subject)]
        assert validator.validate_learning_path(ids).valid is True


# ============================================================================
# Difficulty progression
# ============================================================================

def test_skipping_a_tier_warns_but_stays_valid(tiered_catalog):
    result = ProgressionValidator(tiered_catalog).validate_difficulty_progression(["beginner", "advanced"])

    assert result.valid is True
    assert len(result.warnings) == 1
    assert "beginner" in result.warnings[0]
    assert "advanced" in result.warnings[0]
    assert result.warnings[0].startswith("Large difficulty jump")


def test_large_drop_warns(tiered_catalog):
    result = ProgressionValidator(tiered_catalog).validate_difficulty_progression(["mastery", "intermediate"])

    assert result.valid is True
    assert result.warnings == ["Significant difficulty drop from mastery to intermediate"]


def test_single_tier_steps_do_not_warn(tiered_catalog):
    result = ProgressionValidator(tiered_catalog).validate_difficulty_progression(
        ["beginner", "intermediate", "advanced", "mastery", "advanced", "advanced"]
    )

    assert result.valid is True
    assert result.warnings == []


def test_warning_names_topics_by_display_name_and_id(validator):
    result = validator.validate_difficulty_progression(["k-math-counting-1-10", "9-math-linear-equations"])

    assert result.valid is True
    assert result.warnings == [
        "Large difficulty jump from Counting 1-10 (k-math-counting-1-10) "
        "to Linear Equations (9-math-linear-equations)"
    ]


def test_unknown_topic_invalidates_difficulty_progression(validator):
    result = validator.validate_difficulty_progression(["k-math-counting-1-10", "invalid-topic"])

    assert result.valid is False
    assert result.errors == ["Some topics in the progression are invalid: invalid-topic"]


# ============================================================================
# Single topic checks
# ============================================================================

def test_validate_topic_id(validator):
    assert validator.validate_topic_id("k-math-counting-1-10").valid is True
    assert validator.validate_topic_id("").errors == ["Topic ID cannot be empty"]
    assert validator.validate_topic_id("nope").errors == ["Invalid topic ID: nope"]


def test_validate_topic_prerequisites_names_missing(validator):
    result = validator.validate_topic_prerequisites("k-math-simple-addition", ["k-math-counting-1-10"])

    assert result.valid is False
    assert result.errors == ["Cannot start Simple Addition. Missing prerequisites: Number Recognition"]


def test_validate_topic_prerequisites_recommendations_are_warnings():
    catalog = TopicCatalog([
        make_topic("counting", difficulty="BEGINNER", skills=["Counting"]),
        make_topic("place-value", difficulty="INTERMEDIATE", skills=["Counting"]),
    ])
    result = ProgressionValidator(catalog).validate_topic_prerequisites("place-value", [])

    assert result.valid is True
    assert result.warnings == ["Recommended topics for better success: counting"]

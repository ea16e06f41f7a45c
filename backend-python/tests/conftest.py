"""
Shared fixtures: a small elementary-to-high-school topic catalog in the
camelCase record format of the content seed files.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from curriculum.topic_catalog import TopicCatalog
from models.schemas import Topic


def _record(topic_id, display_name, grade, subject, difficulty, hours, prerequisites, skills, sort_order, active=True):
    return {
        "id": topic_id,
        "name": topic_id.split("-", 2)[-1],
        "displayName": display_name,
        "gradeId": grade,
        "subjectId": subject,
        "difficulty": difficulty,
        "estimatedHours": hours,
        "prerequisites": prerequisites,
        "skills": skills,
        "sortOrder": sort_order,
        "isActive": active,
    }


TOPIC_RECORDS = [
    _record("k-math-counting-1-10", "Counting 1-10", "K", "mathematics", "BEGINNER", 3, [],
            ["Number recognition", "Counting", "One-to-one correspondence"], 1),
    _record("k-math-number-recognition", "Number Recognition", "K", "mathematics", "BEGINNER", 4,
            ["k-math-counting-1-10"], ["Number identification", "Number writing", "Visual recognition"], 2),
    _record("k-math-basic-shapes", "Basic Shapes", "K", "mathematics", "BEGINNER", 3, [],
            ["Shape recognition", "Spatial awareness", "Observation"], 3),
    _record("k-math-simple-addition", "Simple Addition", "K", "mathematics", "BEGINNER", 4,
            ["k-math-counting-1-10", "k-math-number-recognition"],
            ["Addition", "Problem solving", "Mathematical reasoning"], 4),
    _record("k-ela-letter-recognition", "Letter Recognition", "K", "english-language-arts", "BEGINNER", 6, [],
            ["Letter identification", "Visual discrimination", "Alphabet knowledge"], 1),
    _record("k-ela-phonics-sounds", "Letter Sounds", "K", "english-language-arts", "BEGINNER", 8,
            ["k-ela-letter-recognition"], ["Phonemic awareness", "Sound-letter correspondence", "Blending"], 2),
    _record("k-ela-sight-words", "Sight Words", "K", "english-language-arts", "BEGINNER", 5,
            ["k-ela-letter-recognition"], ["Word recognition", "Reading fluency", "Vocabulary"], 3),
    _record("1-math-counting-to-100", "Counting to 100", "1", "mathematics", "BEGINNER", 4, [],
            ["Counting", "Number patterns", "Place value"], 1),
    _record("1-math-addition-within-20", "Addition within 20", "1", "mathematics", "BEGINNER", 6,
            ["1-math-counting-to-100"], ["Addition", "Problem solving", "Mental math"], 2),
    _record("1-math-subtraction-within-20", "Subtraction within 20", "1", "mathematics", "BEGINNER", 6,
            ["1-math-addition-within-20"], ["Subtraction", "Problem solving", "Mathematical reasoning"], 3),
    _record("5-math-fractions-basics", "Understanding Fractions", "5", "mathematics", "INTERMEDIATE", 8, [],
            ["Fraction concepts", "Comparison", "Fraction operations"], 1),
    _record("5-math-decimals-basics", "Understanding Decimals", "5", "mathematics", "INTERMEDIATE", 6,
            ["5-math-fractions-basics"], ["Decimal concepts", "Place value", "Number conversion"], 2),
    _record("5-math-multiplication-multi-digit", "Multi-digit Multiplication", "5", "mathematics", "INTERMEDIATE", 8,
            [], ["Multiplication", "Estimation", "Problem solving"], 3),
    _record("9-math-linear-equations", "Linear Equations", "9", "mathematics", "ADVANCED", 12, [],
            ["Algebraic manipulation", "Graphing", "Problem solving"], 1),
    _record("9-math-systems-equations", "Systems of Equations", "9", "mathematics", "ADVANCED", 10,
            ["9-math-linear-equations"], ["Systems solving", "Multiple methods", "Verification"], 2),
]


def make_topic(topic_id, prerequisites=(), grade="G", subject="math", difficulty="BEGINNER",
               skills=(), sort_order=0, active=True, hours=1.0):
    """Compact Topic builder for hand-made graphs"""
    return Topic(
        id=topic_id,
        grade_id=grade,
        subject_id=subject,
        difficulty=difficulty,
        estimated_hours=hours,
        prerequisites=tuple(prerequisites),
        skills=tuple(skills),
        sort_order=sort_order,
        is_active=active,
    )


@pytest.fixture
def topic_records():
    return [dict(r) for r in TOPIC_RECORDS]


@pytest.fixture
def catalog(topic_records):
    """Catalog built from the sample seed records"""
    return TopicCatalog.from_records(topic_records)


@pytest.fixture
def cyclic_catalog():
    """A -> B -> A plus C depending on A, all in G/math"""
    return TopicCatalog([
        make_topic("A", ["B"], sort_order=1),
        make_topic("B", ["A"], sort_order=2),
        make_topic("C", ["A"], sort_order=3),
    ])

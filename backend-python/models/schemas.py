from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Dict, Any, Optional, Tuple
from enum import Enum


class DifficultyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    MASTERY = "MASTERY"

    @property
    def rank(self) -> int:
        """Position in the BEGINNER..MASTERY ordering (0..3)"""
        return _DIFFICULTY_RANKS[self]


_DIFFICULTY_RANKS = {
    DifficultyLevel.BEGINNER: 0,
    DifficultyLevel.INTERMEDIATE: 1,
    DifficultyLevel.ADVANCED: 2,
    DifficultyLevel.MASTERY: 3,
}


class Topic(BaseModel):
    """A single curriculum topic belonging to one grade and one subject"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    grade_id: str
    subject_id: str
    difficulty: DifficultyLevel
    estimated_hours: float = Field(..., gt=0)
    prerequisites: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    sort_order: int = 0
    is_active: bool = True
    name: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def label(self) -> str:
        """Human readable name used in validation messages"""
        return self.display_name or self.id


class PrerequisiteCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_start: bool
    missing: List[str] = Field(default_factory=list, description="Direct prerequisites not yet completed")
    recommended: List[str] = Field(default_factory=list, description="Advisory, never blocks can_start")
    chain: List[str] = Field(default_factory=list, description="Full transitive prerequisite chain")


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class TopicProgression(BaseModel):
    current_topic: Topic
    prerequisites: List[Topic]
    next_topics: List[Topic]
    related_topics: List[Topic]


class TopicSummary(BaseModel):
    id: str
    display_name: str
    difficulty: DifficultyLevel
    estimated_hours: float
    prerequisite_count: int
    skill_count: int
    sort_order: int


class TopicHierarchy(BaseModel):
    grade: str
    subject: str
    topics: List[TopicSummary]
    total_estimated_hours: float
    difficulty_distribution: Dict[DifficultyLevel, int]


class CompletedTopicsRequest(BaseModel):
    completed_topic_ids: List[str] = Field(default_factory=list, description="Topics the learner has finished")


class TopicSequenceRequest(BaseModel):
    topic_ids: List[str] = Field(..., description="Ordered topic ids to validate")


class PrerequisiteChainResponse(BaseModel):
    topic_id: str
    chain: List[str]


class LearningPathResponse(BaseModel):
    grade: str
    subject: str
    topics: List[Topic]
    total_estimated_hours: float


class CatalogReloadResponse(BaseModel):
    status: str
    topic_count: int


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    services: Dict[str, str]
    catalog_topics: int

"""
Curriculum API Endpoints

REST endpoints over the topic graph: prerequisite chains, eligibility,
learning paths and path validation. Each request works against the catalog
snapshot that was current when it arrived.
"""

from fastapi import APIRouter, HTTPException, Depends
import logging

from models.schemas import (
    CatalogReloadResponse,
    CompletedTopicsRequest,
    LearningPathResponse,
    PrerequisiteChainResponse,
    PrerequisiteCheckResult,
    TopicHierarchy,
    TopicProgression,
    TopicSequenceRequest,
    ValidationResult
)
from curriculum.catalog_provider import catalog_provider
from curriculum.topic_graph import TopicGraphService

router = APIRouter(prefix="/api/curriculum", tags=["curriculum"])

logger = logging.getLogger(__name__)


def get_topic_graph() -> TopicGraphService:
    """Dependency: topic graph bound to the current catalog snapshot"""
    return TopicGraphService.for_provider(catalog_provider)


@router.get("/topics/{topic_id}/chain", response_model=PrerequisiteChainResponse)
async def get_prerequisite_chain(topic_id: str, graph: TopicGraphService = Depends(get_topic_graph)):
    """Full transitive prerequisite chain, foundations first"""
    try:
        return PrerequisiteChainResponse(topic_id=topic_id, chain=graph.prerequisite_chain(topic_id))
    except Exception as e:
        logger.error(f"Error resolving prerequisite chain for {topic_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error resolving prerequisites: {str(e)}")


@router.post("/topics/{topic_id}/eligibility", response_model=PrerequisiteCheckResult)
async def check_topic_eligibility(
    topic_id: str,
    request: CompletedTopicsRequest,
    graph: TopicGraphService = Depends(get_topic_graph)
):
    """
    Check whether a learner can start a topic.

    Unknown topics are reported with can_start=false rather than 404.
    """
    try:
        return graph.check_prerequisites(topic_id, request.completed_topic_ids)
    except Exception as e:
        logger.error(f"Error checking eligibility for {topic_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error checking prerequisites: {str(e)}")


@router.get("/topics/{topic_id}/progression", response_model=TopicProgression)
async def get_topic_progression(topic_id: str, graph: TopicGraphService = Depends(get_topic_graph)):
    """Prerequisites, unlocked topics and related topics for one topic"""
    try:
        progression = graph.topic_progression(topic_id)
    except Exception as e:
        logger.error(f"Error building progression for {topic_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching progression: {str(e)}")

    if progression is None:
        raise HTTPException(status_code=404, detail=f"Topic {topic_id} not found")
    return progression


@router.get("/paths/{grade}/{subject}", response_model=LearningPathResponse)
async def get_learning_path(grade: str, subject: str, graph: TopicGraphService = Depends(get_topic_graph)):
    """
    Topologically ordered learning path for a grade and subject.

    An unknown grade/subject pair yields an empty path.
    """
    try:
        topics = graph.learning_path(grade, subject)
        return LearningPathResponse(
            grade=grade,
            subject=subject,
            topics=topics,
            total_estimated_hours=graph.estimated_completion_hours(t.id for t in topics)
        )
    except Exception as e:
        logger.error(f"Error building learning path {grade}/{subject}: {e}")
        raise HTTPException(status_code=500, detail=f"Error building learning path: {str(e)}")


@router.post("/paths/{grade}/{subject}/available", response_model=LearningPathResponse)
async def get_available_topics(
    grade: str,
    subject: str,
    request: CompletedTopicsRequest,
    graph: TopicGraphService = Depends(get_topic_graph)
):
    """Topics of the path the learner can start next"""
    try:
        topics = graph.available_topics(grade, subject, request.completed_topic_ids)
        return LearningPathResponse(
            grade=grade,
            subject=subject,
            topics=topics,
            total_estimated_hours=graph.estimated_completion_hours(t.id for t in topics)
        )
    except Exception as e:
        logger.error(f"Error fetching available topics {grade}/{subject}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching available topics: {str(e)}")


@router.get("/hierarchy/{grade}/{subject}", response_model=TopicHierarchy)
async def get_topic_hierarchy(grade: str, subject: str, graph: TopicGraphService = Depends(get_topic_graph)):
    try:
        return graph.topic_hierarchy(grade, subject)
    except Exception as e:
        logger.error(f"Error building topic hierarchy {grade}/{subject}: {e}")
        raise HTTPException(status_code=500, detail=f"Error building topic hierarchy: {str(e)}")


@router.post("/paths/validate", response_model=ValidationResult)
async def validate_learning_path(request: TopicSequenceRequest, graph: TopicGraphService = Depends(get_topic_graph)):
    """Structural and difficulty validation of an ordered topic sequence"""
    try:
        return graph.validate_learning_path(request.topic_ids)
    except Exception as e:
        logger.error(f"Error validating learning path: {e}")
        raise HTTPException(status_code=500, detail=f"Error validating learning path: {str(e)}")


@router.post("/paths/validate-difficulty", response_model=ValidationResult)
async def validate_difficulty_progression(
    request: TopicSequenceRequest,
    graph: TopicGraphService = Depends(get_topic_graph)
):
    try:
        return graph.validate_difficulty_progression(request.topic_ids)
    except Exception as e:
        logger.error(f"Error validating difficulty progression: {e}")
        raise HTTPException(status_code=500, detail=f"Error validating difficulty progression: {str(e)}")


@router.post("/catalog/reload", response_model=CatalogReloadResponse)
async def reload_catalog():
    """Reload topics from the configured source; on failure the old catalog stays"""
    try:
        catalog = await catalog_provider.reload()
        return CatalogReloadResponse(status="ok", topic_count=len(catalog))
    except Exception as e:
        kept = len(catalog_provider.current())
        raise HTTPException(
            status_code=500,
            detail=f"Error reloading topic catalog, keeping {kept} topics: {str(e)}"
        )

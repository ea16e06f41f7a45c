from fastapi import APIRouter
from datetime import datetime
from sqlalchemy import text

from models.schemas import HealthCheckResponse
from config.database import async_engine
from curriculum.catalog_provider import catalog_provider

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Database connectivity and catalog size"""

    services = {}

    # Check PostgreSQL
    try:
        async with async_engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        services["postgres"] = "connected"
    except Exception as e:
        services["postgres"] = f"disconnected: {str(e)}"

    topic_count = len(catalog_provider.current())
    services["topic_catalog"] = "loaded" if topic_count else "empty"

    status = "ok" if services["postgres"] == "connected" and topic_count else "degraded"

    return HealthCheckResponse(
        status=status,
        timestamp=datetime.utcnow().isoformat(),
        services=services,
        catalog_topics=topic_count
    )

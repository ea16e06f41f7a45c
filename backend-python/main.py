from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager, suppress
import asyncio
import logging

from config.settings import settings
from config.database import init_db, close_db
from api.health import router as health_router
from api.curriculum import router as curriculum_router
from curriculum.catalog_provider import catalog_provider

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events for FastAPI application"""
    # Startup
    logger.info("🚀 Starting Curriculum Topic Graph service...")

    if settings.CATALOG_SOURCE == "database":
        try:
            await init_db()
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise

    try:
        await catalog_provider.reload()
    except Exception as e:
        logger.error(f"❌ Initial topic catalog load failed: {e}")

    catalog = catalog_provider.current()
    if not len(catalog):
        logger.warning("⚠️ Topic catalog is empty, all paths will be empty until a reload succeeds")

    reload_task = None
    if settings.CATALOG_RELOAD_INTERVAL > 0:
        reload_task = asyncio.create_task(
            catalog_provider.run_periodic_reload(settings.CATALOG_RELOAD_INTERVAL)
        )

    logger.info(f"✅ Service started with {len(catalog)} topics")
    logger.info("📚 API docs at http://0.0.0.0:8000/docs")

    yield

    # Shutdown
    logger.info("⏳ Shutting down Curriculum Topic Graph service...")

    if reload_task is not None:
        reload_task.cancel()
        with suppress(asyncio.CancelledError):
            await reload_task

    try:
        await close_db()
        logger.info("✅ Service shut down gracefully")
    except Exception as e:
        logger.error(f"❌ Shutdown error: {e}")


# Initialize FastAPI app
app = FastAPI(
    title="Curriculum Topic Graph",
    description="Prerequisite resolution and learning-path ordering for curriculum topics",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(curriculum_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Curriculum Topic Graph",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )

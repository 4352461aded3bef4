from contextlib import asynccontextmanager

import structlog
from backend_common.fastapi_app import create_service_app
from fastapi import FastAPI

from .config import get_settings
from .exceptions import ConfigurationError
from .logging_config import configure_logging
from .routers import cycle, generation
from .services.content_generation import ContentGenerator
from .services.generation_client import GenerationClient
from .services.task_registry import GenerationTaskRegistry

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    try:
        client = GenerationClient(settings)
    except ConfigurationError as exc:
        logger.error("configuration_error", error=str(exc))
        raise

    registry = GenerationTaskRegistry(max_kept=settings.GENERATION_TASKS_MAX_KEPT)
    app.state.content_generator = ContentGenerator(client, registry)
    logger.info("cycle_coach_service_started", model=client.model)
    yield
    await registry.shutdown()


app = create_service_app(title="cycle-coach-service", lifespan=lifespan)

app.include_router(cycle.router, prefix="/api/v1/cycle", tags=["cycle"])
app.include_router(generation.router, prefix="/api/v1/generation", tags=["generation"])


@app.get("/api/v1/health")
async def health():
    return {"status": "ok"}

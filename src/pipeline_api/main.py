from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.pipeline_api.api.middlewares import setup_middlewares
from src.pipeline_api.api.v1.router import api_router
from src.pipeline_api.core.config import get_settings
from src.pipeline_api.core.db import dispose_engine, run_migrations_async
from src.pipeline_api.core.exceptions import setup_exception_handlers
from src.pipeline_api.core.health import setup_health_endpoint, setup_metrics
from src.pipeline_api.core.logging import get_logger, setup_logging
from src.pipeline_api.core.shutdown import RequestTracker
from src.pipeline_api.realtime import ConnectionManager, websocket_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)
    if settings.is_production and settings.debug:
        logger.warning("Debug logging is enabled in production")

    if settings.database_auto_migrate:
        await run_migrations_async()
        logger.info("Database migrations applied")

    yield

    # Graceful shutdown with request draining
    tracker: RequestTracker = app.state.request_tracker
    logger.info("Shutdown initiated", in_flight=tracker.in_flight_count)
    await tracker.start_shutdown()
    await tracker.wait_for_drain(timeout=settings.shutdown_grace_period)

    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "assignments", "description": "Assignments and their owned tasks"},
    {"name": "tasks", "description": "Tasks addressed through their assignment"},
    {"name": "releases", "description": "Releases, their owned sets and deployment"},
    {"name": "sets", "description": "Release sets across a scope"},
    {"name": "messages", "description": "Messages with ownership and optimistic locking"},
    {"name": "hello", "description": "Authentication smoke checks"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Code pipeline API: assignments, releases, deployments and messages",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.request_tracker = RequestTracker()
    app.state.connection_manager = ConnectionManager()

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(websocket_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()

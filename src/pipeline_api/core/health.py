"""Health probe and Prometheus metrics endpoints."""

import secrets

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.pipeline_api.core.config import get_settings
from src.pipeline_api.core.db import get_session
from src.pipeline_api.core.logging import get_logger

logger = get_logger(__name__)


async def check_database() -> str:
    """Run a trivial query; returns "healthy" or "unhealthy: <reason>"."""
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health(request: Request) -> JSONResponse:
        """200 when the database answers; 503 while draining or when it does not."""
        tracker = request.app.state.request_tracker
        if tracker.is_shutting_down:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "draining",
                    "in_flight_requests": tracker.in_flight_count,
                },
            )

        database = await check_database()
        healthy = database == "healthy"
        return JSONResponse(
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "healthy" if healthy else "unhealthy", "database": database},
        )


def _require_metrics_key(expected: str):  # type: ignore[no-untyped-def]
    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify(api_key: str | None = Depends(api_key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    return verify


def setup_metrics(app: FastAPI) -> None:
    """Expose /metrics; when METRICS_API_KEY is set scrapers must send it."""
    settings = get_settings()
    dependencies = []
    if settings.metrics_api_key:
        dependencies.append(Depends(_require_metrics_key(settings.metrics_api_key)))
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", dependencies=dependencies)

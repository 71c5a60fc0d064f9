"""Async engine, created lazily from settings."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.pipeline_api.core.config import get_settings

_engine: AsyncEngine | None = None


def _engine_options(url: str) -> dict[str, Any]:
    settings = get_settings()
    options: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    # SQLite brings its own pool; sizing applies to server databases
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    return options


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        url = get_settings().database_url
        _engine = create_async_engine(url, **_engine_options(url))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Called on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None

"""Session factory and a standalone session context."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.pipeline_api.core.db.engine import get_engine


def get_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used for request and test sessions."""
    if engine is None:
        engine = get_engine()
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_session(
    engine: AsyncEngine | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Open a session on ``engine``, or on the configured engine.

    Services own the commit; anything left uncommitted rolls back on close.
    """
    session_factory = get_session_factory(engine)
    async with session_factory() as session:
        yield session

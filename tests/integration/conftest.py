"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
every session shares the single connection) and an app whose request
sessions are bound to it. Uses polyfactory for test data generation.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# Register every table on SQLModel.metadata
from src.pipeline_api import models  # noqa: F401
from src.pipeline_api.api.dependencies import get_db_session
from src.pipeline_api.core.db import get_session_factory
from src.pipeline_api.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh schema for every test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and asserting on data outside of requests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """Application with request sessions bound to the test database."""
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing API endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def alice_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers("alice", roles=("ROLE_USER",))


@pytest.fixture
def bob_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_headers("bob", roles=("ROLE_USER",))


@pytest.fixture
def admin_headers(auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    """Administrators also hold ROLE_USER, as the identity provider issues them."""
    return auth_headers("root", roles=("ROLE_USER", "ROLE_ADMIN"))

"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Environment must be in place before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("JWT_ALGORITHM", "HS256")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Callable

import pytest

from src.pipeline_api.core.config import get_settings
from tests.helpers import make_token

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def token_for() -> Callable[..., str]:
    """Factory fixture issuing tokens the way the identity provider would."""
    return make_token


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build an Authorization header for a username and realm roles."""

    def _headers(username: str = "alice", roles: tuple[str, ...] = ("ROLE_USER",)) -> dict:
        return {"Authorization": f"Bearer {make_token(username, roles=roles)}"}

    return _headers

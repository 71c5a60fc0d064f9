"""Database access: engine, sessions, migrations."""

from src.pipeline_api.core.db.engine import dispose_engine, get_engine
from src.pipeline_api.core.db.migrations import run_migrations_async, run_migrations_sync
from src.pipeline_api.core.db.session import get_session, get_session_factory

__all__ = [
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
    "run_migrations_async",
    "run_migrations_sync",
]

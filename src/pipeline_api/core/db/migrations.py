"""Run Alembic migrations from code (startup, tests, scripts)."""

import asyncio

from alembic.config import Config

from alembic import command

ALEMBIC_INI = "alembic.ini"


def run_migrations_sync(revision: str = "head") -> None:
    """Upgrade the configured database to ``revision``."""
    command.upgrade(Config(ALEMBIC_INI), revision)


async def run_migrations_async(revision: str = "head") -> None:
    """Upgrade from inside the event loop.

    ``env.py`` starts its own loop, so the upgrade runs in a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync, revision)

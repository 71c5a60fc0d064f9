"""Transaction helpers shared by the resource services."""

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pipeline_api.core.exceptions import ConflictError


async def commit_or_conflict(session: AsyncSession, detail: str) -> None:
    """Commit, reporting a unique-constraint violation as a ConflictError.

    The pre-checks in the services catch ordinary duplicates; this settles
    the race where a concurrent writer inserts the same key first.
    """
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError(detail) from e


def ensure_unique_keys(keys: Iterable[str], label: str, parent: str) -> None:
    """Reject a child payload that repeats a natural key."""
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            raise ConflictError(f"{label} with id {key} appears more than once in {parent}")
        seen.add(key)

from datetime import UTC, datetime
from typing import Protocol


def utc_now() -> datetime:
    """Current UTC time without tzinfo; timestamp columns are naive UTC."""
    return datetime.now(UTC).replace(tzinfo=None)


class Timestamped(Protocol):
    updated_at: datetime


def touch(entity: Timestamped) -> None:
    """Refresh ``updated_at`` on a mutating write."""
    entity.updated_at = utc_now()

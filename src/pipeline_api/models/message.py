"""Message model - standalone resource with optimistic locking."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, Integer
from sqlmodel import Field, SQLModel

from src.pipeline_api.models.base import utc_now

MAX_MESSAGE_LENGTH = 500

# Mapper version counter: UPDATEs match on (id, version) and bump it by one.
_version_column = Column("version", Integer, nullable=False)


class Message(SQLModel, table=True):
    """Chat-style message owned by its sender."""

    __tablename__ = "messages"
    __mapper_args__ = {"version_id_col": _version_column}

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    content: str = Field(max_length=MAX_MESSAGE_LENGTH)
    sender: str = Field(max_length=255, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    version: int | None = Field(default=None, sa_column=_version_column)

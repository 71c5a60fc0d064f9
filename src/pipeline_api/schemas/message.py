"""Message schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.pipeline_api.models.message import MAX_MESSAGE_LENGTH


def _validate_content(v: str) -> str:
    if not v.strip():
        raise ValueError("Content is required")
    return v


class MessageCreate(BaseModel):
    """Schema for creating a message. The sender is the caller."""

    content: str = Field(max_length=MAX_MESSAGE_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _validate_content(v)


class MessageUpdate(BaseModel):
    """Schema for updating a message.

    ``version`` is the version the caller last read; a mismatch with the
    stored version is rejected.
    """

    content: str = Field(max_length=MAX_MESSAGE_LENGTH)
    version: int | None = Field(default=None, ge=1)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _validate_content(v)


class MessageRead(BaseModel):
    """Schema for reading a message."""

    id: UUID
    content: str
    sender: str
    created_at: datetime
    updated_at: datetime
    version: int

    model_config = {"from_attributes": True}

"""Message service - ownership and optimistic locking."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.pipeline_api.core.exceptions import (
    NotFoundError,
    OptimisticConflictError,
    PermissionDeniedError,
    ValidationFailedError,
)
from src.pipeline_api.core.logging import get_logger
from src.pipeline_api.models import Message
from src.pipeline_api.models.base import touch
from src.pipeline_api.repositories import MessageRepository
from src.pipeline_api.schemas.message import MessageCreate, MessageUpdate
from src.pipeline_api.schemas.pagination import parse_sort

logger = get_logger(__name__)


class MessageService:
    """Message CRUD. Only a message's sender may change or remove it."""

    def __init__(self, message_repo: MessageRepository, session: AsyncSession):
        self.message_repo = message_repo
        self.session = session

    def _order_by(self, sort: str | None) -> list[Any]:
        try:
            order = parse_sort(sort)
            return self.message_repo.order_clauses(order.field, order.descending)
        except ValueError as e:
            raise ValidationFailedError(str(e)) from e

    async def list_messages(
        self,
        page: int,
        size: int,
        sort: str | None = None,
        sender: str | None = None,
    ) -> tuple[list[Message], int]:
        """List messages page by page.

        Returns:
            Tuple of (items, total)

        Raises:
            ValidationFailedError: If the sort parameter is not supported
        """
        return await self.message_repo.list_page(page, size, self._order_by(sort), sender)

    async def search_messages(
        self, query: str, page: int, size: int, sort: str | None = None
    ) -> tuple[list[Message], int]:
        """Case-insensitive substring search over content."""
        return await self.message_repo.search(query, page, size, self._order_by(sort))

    async def get_message(self, message_id: UUID) -> Message:
        message = await self.message_repo.get_by_id(message_id)
        if message is None:
            raise NotFoundError(f"Message not found with id: {message_id}")
        return message

    async def create_message(self, data: MessageCreate, sender: str) -> Message:
        message = Message(content=data.content, sender=sender)
        self.message_repo.add(message)
        await self.session.commit()
        logger.info("Message created", message_id=str(message.id), sender=sender)
        return message

    async def update_message(
        self, message_id: UUID, data: MessageUpdate, username: str
    ) -> Message:
        """Change a message's content.

        Raises:
            NotFoundError: If the message does not exist
            PermissionDeniedError: If the caller is not the sender
            OptimisticConflictError: If the caller's version is stale, or a
                concurrent update committed first
        """
        message = await self.get_message(message_id)
        if message.sender != username:
            raise PermissionDeniedError("You can only update your own messages")
        if data.version is not None and data.version != message.version:
            raise OptimisticConflictError(
                f"Message {message_id} was modified (expected version {data.version}, "
                f"found {message.version})"
            )

        message.content = data.content
        touch(message)
        try:
            await self.session.commit()
        except StaleDataError as e:
            await self.session.rollback()
            raise OptimisticConflictError(
                f"Message {message_id} was modified by another request"
            ) from e
        return message

    async def delete_message(self, message_id: UUID, username: str) -> None:
        """Delete a message.

        Raises:
            NotFoundError: If the message does not exist
            PermissionDeniedError: If the caller is not the sender
        """
        message = await self.get_message(message_id)
        if message.sender != username:
            raise PermissionDeniedError("You can only delete your own messages")
        try:
            await self.message_repo.delete(message)
            await self.session.commit()
        except StaleDataError as e:
            await self.session.rollback()
            raise OptimisticConflictError(
                f"Message {message_id} was modified by another request"
            ) from e
        logger.info("Message deleted", message_id=str(message_id), sender=username)

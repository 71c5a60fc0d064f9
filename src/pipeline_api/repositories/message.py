"""Repository for Message entity."""

from typing import Any

from sqlmodel import col, select

from src.pipeline_api.models import Message
from src.pipeline_api.repositories.base import BaseRepository

SORTABLE_FIELDS = ("created_at", "updated_at", "sender", "content")


class MessageRepository(BaseRepository[Message]):
    """Repository for Message entity."""

    model = Message

    @staticmethod
    def order_clauses(field: str, descending: bool) -> list[Any]:
        """Build ORDER BY clauses for a sortable field, tie-broken by id."""
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {field}")
        column = getattr(Message, field)
        primary = column.desc() if descending else column.asc()
        return [primary, Message.id]

    async def list_page(
        self,
        page: int,
        size: int,
        order_by: list[Any],
        sender: str | None = None,
    ) -> tuple[list[Message], int]:
        """List messages page by page, optionally only one sender's."""
        query = select(Message)
        if sender:
            query = query.where(Message.sender == sender)
        return await self.paginate(query, page, size, order_by)

    async def search(
        self,
        text: str,
        page: int,
        size: int,
        order_by: list[Any],
    ) -> tuple[list[Message], int]:
        """Case-insensitive substring search over message content."""
        query = select(Message).where(col(Message.content).icontains(text, autoescape=True))
        return await self.paginate(query, page, size, order_by)

"""Base repository with common CRUD operations."""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy import exists, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.pipeline_api.core.security.validators import normalize_filter

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]
    # Filter name -> column; names outside this map are rejected
    filter_columns: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def exists_where(self, *criteria: Any) -> bool:
        """True when any row matches; no entity or relationship is loaded."""
        return bool(await self.session.scalar(exists().where(*criteria).select()))

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    def apply_filters(self, query: Any, filters: Mapping[str, str | None]) -> Any:
        """AND each present filter onto the query.

        Blank values are treated as absent, so a mapping with only blank
        values leaves the query untouched.

        Raises:
            ValueError: If a filter name is not declared in filter_columns
        """
        for name, raw_value in filters.items():
            column = self.filter_columns.get(name)
            if column is None:
                raise ValueError(f"Unknown filter for {self.model.__name__}: {name}")
            value = normalize_filter(raw_value)
            if value is not None:
                query = query.where(column == value)
        return query

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        page: int,
        size: int,
        order_by: list[Any],
    ) -> tuple[list[ModelType], int]:
        """Execute offset pagination on a query.

        Args:
            query: The base SQLAlchemy query to paginate
            page: Zero-based page index
            size: Maximum number of items on the page
            order_by: Ordering clauses; callers should end with a unique column
                so pages are stable

        Returns:
            Tuple of (items, total)
            - items: List of results for this page
            - total: Number of rows matching the query across all pages
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await self.session.execute(count_query)).scalar_one()

        page_query = query.order_by(*order_by).offset(page * size).limit(size)
        result = await self.session.execute(page_query)
        return list(result.scalars().all()), total

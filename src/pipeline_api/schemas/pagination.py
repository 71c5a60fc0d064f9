"""Pagination schemas for offset-based pagination."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Generic page of results with offset-based pagination.

    ``page`` is zero-based. ``total`` counts matching items across all pages.
    """

    items: list[T]
    page: int = Field(ge=0)
    size: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def build(cls, items: list[T], page: int, size: int, total: int) -> "PageResponse[T]":
        return cls(
            items=items,
            page=page,
            size=size,
            total=total,
            total_pages=math.ceil(total / size) if size else 0,
        )


class SortSpec(BaseModel):
    """Parsed ``field[,asc|desc]`` sort parameter."""

    field: str
    descending: bool = True


def parse_sort(sort: str | None, default: str = "created_at,desc") -> SortSpec:
    """Parse a ``field[,asc|desc]`` sort string.

    Direction defaults to ascending when only a field is given.

    Raises:
        ValueError: If the direction is neither asc nor desc
    """
    raw = (sort or "").strip() or default
    field, _, direction = raw.partition(",")
    direction = direction.strip().lower() or "asc"
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort direction: {direction}")
    return SortSpec(field=field.strip(), descending=direction == "desc")

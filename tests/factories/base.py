"""Shared polyfactory setup for the pipeline tables."""

from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.pipeline_api.models.base import utc_now

__all__ = ["BaseFactory", "short_id", "utc_now"]


def short_id(prefix: str) -> str:
    """Readable unique natural key, e.g. ``A-1f2e3d4c``."""
    return f"{prefix}-{uuid4().hex[:8]}"


class BaseFactory(SQLAlchemyFactory):
    """Builds unsaved rows. Tests attach children to parents themselves."""

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False

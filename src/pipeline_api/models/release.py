"""Release aggregate - a release owns its sets."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from src.pipeline_api.models.base import utc_now


class Release(SQLModel, table=True):
    """Release identified by (srid, release_id)."""

    __tablename__ = "releases"
    __table_args__ = (
        UniqueConstraint("srid", "release_id", name="uq_releases_srid_release_id"),
        Index("ix_releases_srid_created", "srid", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    release_id: str = Field(max_length=100)
    srid: str = Field(max_length=100, index=True)
    application: str | None = Field(default=None, max_length=255)
    stream: str | None = Field(default=None, max_length=255)
    owner: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    sets: list["ReleaseSet"] = Relationship(
        back_populates="release",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
            "order_by": "ReleaseSet.created_at",
        },
    )


class ReleaseSet(SQLModel, table=True):
    """Deployable set owned by a release; set_id is unique per release."""

    __tablename__ = "release_sets"
    __table_args__ = (
        UniqueConstraint("release_pk", "set_id", name="uq_release_sets_release_set_id"),
        Index("ix_release_sets_set_id", "set_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    set_id: str = Field(max_length=100)
    release_pk: UUID | None = Field(
        default=None, foreign_key="releases.id", ondelete="CASCADE", index=True
    )
    status: str | None = Field(default=None, max_length=50)
    owner: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    deployed_by: str | None = Field(default=None, max_length=255)
    deployed_at: datetime | None = Field(default=None)
    deployment_status: str | None = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    release: Release | None = Relationship(
        back_populates="sets", sa_relationship_kwargs={"lazy": "selectin"}
    )

"""Assignment aggregate - an assignment owns its tasks."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from src.pipeline_api.models.base import utc_now


class Assignment(SQLModel, table=True):
    """Assignment identified by (srid, assignment_id)."""

    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("srid", "assignment_id", name="uq_assignments_srid_assignment_id"),
        Index("ix_assignments_srid_created", "srid", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    assignment_id: str = Field(max_length=100)
    srid: str = Field(max_length=100, index=True)
    application: str | None = Field(default=None, max_length=255)
    stream: str | None = Field(default=None, max_length=255)
    owner: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=50)
    release_id: str | None = Field(default=None, max_length=100)
    set_id: str | None = Field(default=None, max_length=100)
    level: str | None = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    tasks: list["Task"] = Relationship(
        back_populates="assignment",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
            "order_by": "Task.created_at",
        },
    )


class Task(SQLModel, table=True):
    """Task owned by an assignment; task_id is unique per assignment."""

    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("assignment_pk", "task_id", name="uq_tasks_assignment_task_id"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: str = Field(max_length=100)
    assignment_pk: UUID | None = Field(
        default=None, foreign_key="assignments.id", ondelete="CASCADE", index=True
    )
    type: str | None = Field(default=None, max_length=100)
    status: str | None = Field(default=None, max_length=50)
    component_type: str | None = Field(default=None, max_length=100)
    component_name: str | None = Field(default=None, max_length=255)
    component_extension: str | None = Field(default=None, max_length=50)
    component_version: str | None = Field(default=None, max_length=50)
    component_last_action: str | None = Field(default=None, max_length=100)
    component_last_action_date_time: str | None = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    assignment: Assignment | None = Relationship(
        back_populates="tasks", sa_relationship_kwargs={"lazy": "selectin"}
    )

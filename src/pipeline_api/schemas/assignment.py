"""Assignment and task schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.pipeline_api.core.security.validators import validate_natural_key


class TaskFields(BaseModel):
    """Mutable task fields, overwritten wholesale on update."""

    type: str | None = Field(default=None, max_length=100)
    status: str | None = Field(default=None, max_length=50)
    component_type: str | None = Field(default=None, max_length=100)
    component_name: str | None = Field(default=None, max_length=255)
    component_extension: str | None = Field(default=None, max_length=50)
    component_version: str | None = Field(default=None, max_length=50)
    component_last_action: str | None = Field(default=None, max_length=100)
    component_last_action_date_time: str | None = Field(default=None, max_length=50)


class TaskCreate(TaskFields):
    """Schema for creating a task."""

    task_id: str = Field(min_length=1, max_length=100)

    @field_validator("task_id")
    @classmethod
    def validate_task_id(cls, v: str) -> str:
        return validate_natural_key(v, "Task ID")


class TaskUpdate(TaskFields):
    """Schema for updating a task. A task_id in the body is ignored."""

    task_id: str | None = None


class TaskRead(TaskFields):
    """Schema for reading a task."""

    id: UUID
    task_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssignmentFields(BaseModel):
    """Mutable assignment fields, overwritten wholesale on update."""

    application: str | None = Field(default=None, max_length=255)
    stream: str | None = Field(default=None, max_length=255)
    owner: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=50)
    release_id: str | None = Field(default=None, max_length=100)
    set_id: str | None = Field(default=None, max_length=100)
    level: str | None = Field(default=None, max_length=50)


class AssignmentCreate(AssignmentFields):
    """Schema for creating an assignment with its initial tasks."""

    assignment_id: str = Field(min_length=1, max_length=100)
    tasks: list[TaskCreate] = Field(default_factory=list)

    @field_validator("assignment_id")
    @classmethod
    def validate_assignment_id(cls, v: str) -> str:
        return validate_natural_key(v, "Assignment ID")


class AssignmentUpdate(AssignmentFields):
    """Schema for updating an assignment.

    When ``tasks`` is given the existing tasks are replaced; when omitted
    they are left untouched.
    """

    tasks: list[TaskCreate] | None = None


class AssignmentRead(AssignmentFields):
    """Schema for reading an assignment."""

    id: UUID
    assignment_id: str
    srid: str
    tasks: list[TaskRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

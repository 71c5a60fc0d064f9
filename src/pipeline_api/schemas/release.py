"""Release, release set and deploy schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.pipeline_api.core.security.validators import validate_natural_key


class ReleaseSetFields(BaseModel):
    """Mutable release set fields, overwritten wholesale on update."""

    status: str | None = Field(default=None, max_length=50)
    owner: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    deployed_by: str | None = Field(default=None, max_length=255)
    deployed_at: datetime | None = None
    deployment_status: str | None = Field(default=None, max_length=50)


class ReleaseSetCreate(ReleaseSetFields):
    """Schema for creating a release set."""

    set_id: str = Field(min_length=1, max_length=100)

    @field_validator("set_id")
    @classmethod
    def validate_set_id(cls, v: str) -> str:
        return validate_natural_key(v, "Set ID")


class ReleaseSetUpdate(ReleaseSetFields):
    """Schema for updating a release set. A set_id in the body is ignored."""

    set_id: str | None = None


class ReleaseSetRead(ReleaseSetFields):
    """Schema for reading a release set."""

    id: UUID
    set_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReleaseFields(BaseModel):
    """Mutable release fields, overwritten wholesale on update."""

    application: str | None = Field(default=None, max_length=255)
    stream: str | None = Field(default=None, max_length=255)
    owner: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=1000)


class ReleaseCreate(ReleaseFields):
    """Schema for creating a release with its initial sets."""

    release_id: str = Field(min_length=1, max_length=100)
    sets: list[ReleaseSetCreate] = Field(default_factory=list)

    @field_validator("release_id")
    @classmethod
    def validate_release_id(cls, v: str) -> str:
        return validate_natural_key(v, "Release ID")


class ReleaseUpdate(ReleaseFields):
    """Schema for updating a release.

    When ``sets`` is given the existing sets are replaced; when omitted
    they are left untouched.
    """

    sets: list[ReleaseSetCreate] | None = None


class ReleaseRead(ReleaseFields):
    """Schema for reading a release."""

    id: UUID
    release_id: str
    srid: str
    sets: list[ReleaseSetRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeployRequest(BaseModel):
    """Deployment parameters. Recorded on the new set; nothing is executed."""

    level: str | None = Field(default=None, max_length=50)
    environment: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    auto_deploy: bool = False
    runtime_configuration: str | None = None

"""Factories for the assignment and release aggregates and messages."""

from uuid import uuid4

from polyfactory import Use

from src.pipeline_api.models import Assignment, Message, Release, ReleaseSet, Task
from tests.factories.base import BaseFactory, short_id, utc_now


class AssignmentFactory(BaseFactory):
    """Factory for generating Assignment test data."""

    __model__ = Assignment

    id = Use(uuid4)
    assignment_id = Use(short_id, "A")
    srid = "PRJ1"
    application = "PLAY"
    stream = "PLAY"
    owner = "alice"
    status = "ACTIVE"
    release_id = None
    set_id = None
    level = "DEV1"
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TaskFactory(BaseFactory):
    """Factory for generating Task test data."""

    __model__ = Task

    id = Use(uuid4)
    task_id = Use(short_id, "T")
    assignment_pk = None
    type = "COBOL"
    status = "ACTIVE"
    component_type = "COB"
    component_name = Use(short_id, "PGM")
    component_extension = "cbl"
    component_version = "1"
    component_last_action = "CHECKOUT"
    component_last_action_date_time = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ReleaseFactory(BaseFactory):
    """Factory for generating Release test data."""

    __model__ = Release

    id = Use(uuid4)
    release_id = Use(short_id, "R")
    srid = "PRJ1"
    application = "PLAY"
    stream = "PLAY"
    owner = "alice"
    status = "OPEN"
    description = "Quarterly release"
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ReleaseSetFactory(BaseFactory):
    """Factory for generating ReleaseSet test data."""

    __model__ = ReleaseSet

    id = Use(uuid4)
    set_id = Use(short_id, "S")
    release_pk = None
    status = "OPEN"
    owner = "alice"
    description = None
    deployed_by = None
    deployed_at = None
    deployment_status = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class MessageFactory(BaseFactory):
    """Factory for generating Message test data."""

    __model__ = Message

    id = Use(uuid4)
    content = "Hello from the pipeline"
    sender = "alice"
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    version = None

"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.pipeline_api.api.dependencies.db import DBSession
from src.pipeline_api.repositories import (
    AssignmentRepository,
    MessageRepository,
    ReleaseRepository,
    ReleaseSetRepository,
    TaskRepository,
)


def get_assignment_repository(session: DBSession) -> AssignmentRepository:
    return AssignmentRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_release_repository(session: DBSession) -> ReleaseRepository:
    return ReleaseRepository(session)


def get_release_set_repository(session: DBSession) -> ReleaseSetRepository:
    return ReleaseSetRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


AssignmentRepo = Annotated[AssignmentRepository, Depends(get_assignment_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
ReleaseRepo = Annotated[ReleaseRepository, Depends(get_release_repository)]
ReleaseSetRepo = Annotated[ReleaseSetRepository, Depends(get_release_set_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]

"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.pipeline_api.api.dependencies.db import DBSession
from src.pipeline_api.api.dependencies.repositories import (
    AssignmentRepo,
    MessageRepo,
    ReleaseRepo,
    ReleaseSetRepo,
    TaskRepo,
)
from src.pipeline_api.services import (
    AssignmentService,
    MessageService,
    ReleaseService,
    ReleaseSetService,
    TaskService,
)


def get_assignment_service(
    assignment_repo: AssignmentRepo, session: DBSession
) -> AssignmentService:
    """Get assignment service."""
    return AssignmentService(assignment_repo, session)


def get_task_service(
    assignment_repo: AssignmentRepo,
    task_repo: TaskRepo,
    session: DBSession,
) -> TaskService:
    """Get task service (tasks are addressed through their assignment)."""
    return TaskService(assignment_repo, task_repo, session)


def get_release_service(release_repo: ReleaseRepo, session: DBSession) -> ReleaseService:
    """Get release service."""
    return ReleaseService(release_repo, session)


def get_release_set_service(
    release_repo: ReleaseRepo,
    set_repo: ReleaseSetRepo,
    session: DBSession,
) -> ReleaseSetService:
    """Get release set service (sets are addressed through their release)."""
    return ReleaseSetService(release_repo, set_repo, session)


def get_message_service(message_repo: MessageRepo, session: DBSession) -> MessageService:
    """Get message service."""
    return MessageService(message_repo, session)


AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
ReleaseServiceDep = Annotated[ReleaseService, Depends(get_release_service)]
ReleaseSetServiceDep = Annotated[ReleaseSetService, Depends(get_release_set_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]

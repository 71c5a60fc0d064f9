"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.pipeline_api.api.dependencies.auth import (
    AdminPrincipal,
    CurrentPrincipal,
    UserPrincipal,
    get_current_principal,
    require_roles,
)

# Database
from src.pipeline_api.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.pipeline_api.api.dependencies.repositories import (
    AssignmentRepo,
    MessageRepo,
    ReleaseRepo,
    ReleaseSetRepo,
    TaskRepo,
    get_assignment_repository,
    get_message_repository,
    get_release_repository,
    get_release_set_repository,
    get_task_repository,
)

# Services
from src.pipeline_api.api.dependencies.services import (
    AssignmentServiceDep,
    MessageServiceDep,
    ReleaseServiceDep,
    ReleaseSetServiceDep,
    TaskServiceDep,
    get_assignment_service,
    get_message_service,
    get_release_service,
    get_release_set_service,
    get_task_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminPrincipal",
    "CurrentPrincipal",
    "UserPrincipal",
    "get_current_principal",
    "require_roles",
    # Repositories
    "AssignmentRepo",
    "MessageRepo",
    "ReleaseRepo",
    "ReleaseSetRepo",
    "TaskRepo",
    "get_assignment_repository",
    "get_message_repository",
    "get_release_repository",
    "get_release_set_repository",
    "get_task_repository",
    # Services
    "AssignmentServiceDep",
    "MessageServiceDep",
    "ReleaseServiceDep",
    "ReleaseSetServiceDep",
    "TaskServiceDep",
    "get_assignment_service",
    "get_message_service",
    "get_release_service",
    "get_release_set_service",
    "get_task_service",
]

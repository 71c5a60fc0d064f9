"""Repository layer - data access abstraction."""

from src.pipeline_api.repositories.assignment import AssignmentRepository, TaskRepository
from src.pipeline_api.repositories.base import BaseRepository
from src.pipeline_api.repositories.message import MessageRepository
from src.pipeline_api.repositories.release import ReleaseRepository, ReleaseSetRepository

__all__ = [
    # Base
    "BaseRepository",
    # Assignment aggregate
    "AssignmentRepository",
    "TaskRepository",
    # Release aggregate
    "ReleaseRepository",
    "ReleaseSetRepository",
    # Messages
    "MessageRepository",
]

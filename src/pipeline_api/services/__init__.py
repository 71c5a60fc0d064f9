from src.pipeline_api.services.assignment_service import AssignmentService, TaskService
from src.pipeline_api.services.message_service import MessageService
from src.pipeline_api.services.release_service import ReleaseService, ReleaseSetService

__all__ = [
    "AssignmentService",
    "MessageService",
    "ReleaseService",
    "ReleaseSetService",
    "TaskService",
]

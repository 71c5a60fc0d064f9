"""Model exports.

Import from here: `from src.pipeline_api.models import Assignment, Release`
"""

from src.pipeline_api.models.assignment import Assignment, Task
from src.pipeline_api.models.enums import SYSTEM_DEPLOYER, DeploymentStatus
from src.pipeline_api.models.message import MAX_MESSAGE_LENGTH, Message
from src.pipeline_api.models.release import Release, ReleaseSet

__all__ = [
    # Enums
    "DeploymentStatus",
    "SYSTEM_DEPLOYER",
    # Assignment aggregate
    "Assignment",
    "Task",
    # Release aggregate
    "Release",
    "ReleaseSet",
    # Messages
    "MAX_MESSAGE_LENGTH",
    "Message",
]

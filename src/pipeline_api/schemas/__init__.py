from src.pipeline_api.schemas.assignment import (
    AssignmentCreate,
    AssignmentRead,
    AssignmentUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from src.pipeline_api.schemas.hello import HelloResponse
from src.pipeline_api.schemas.message import MessageCreate, MessageRead, MessageUpdate
from src.pipeline_api.schemas.pagination import PageResponse, SortSpec, parse_sort
from src.pipeline_api.schemas.release import (
    DeployRequest,
    ReleaseCreate,
    ReleaseRead,
    ReleaseSetCreate,
    ReleaseSetRead,
    ReleaseSetUpdate,
    ReleaseUpdate,
)

__all__ = [
    # Assignment
    "AssignmentCreate",
    "AssignmentRead",
    "AssignmentUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    # Release
    "DeployRequest",
    "ReleaseCreate",
    "ReleaseRead",
    "ReleaseSetCreate",
    "ReleaseSetRead",
    "ReleaseSetUpdate",
    "ReleaseUpdate",
    # Message
    "MessageCreate",
    "MessageRead",
    "MessageUpdate",
    # Pagination
    "PageResponse",
    "SortSpec",
    "parse_sort",
    # Misc
    "HelloResponse",
]

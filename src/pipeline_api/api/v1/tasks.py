"""Task endpoints - tasks are addressed through their assignment."""

from fastapi import APIRouter, status

from src.pipeline_api.api.dependencies import AdminPrincipal, TaskServiceDep, UserPrincipal
from src.pipeline_api.api.v1.params import AssignmentId, Srid, TaskId
from src.pipeline_api.schemas.assignment import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/{srid}/assignments/{assignment_id}/tasks", tags=["tasks"])

_PARENT_MISSING = {404: {"description": "Assignment or task not found"}}


@router.get("", response_model=list[TaskRead], summary="List tasks", responses=_PARENT_MISSING)
async def list_tasks(
    srid: Srid,
    assignment_id: AssignmentId,
    service: TaskServiceDep,
    _principal: UserPrincipal,
) -> list[TaskRead]:
    tasks = await service.list_tasks(srid, assignment_id)
    return [TaskRead.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskRead, summary="Get task", responses=_PARENT_MISSING)
async def get_task(
    srid: Srid,
    assignment_id: AssignmentId,
    task_id: TaskId,
    service: TaskServiceDep,
    _principal: UserPrincipal,
) -> TaskRead:
    task = await service.get_task(srid, assignment_id, task_id)
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses={
        201: {"description": "Task created"},
        404: {"description": "Assignment not found"},
        409: {"description": "Task ID already exists in this assignment"},
    },
)
async def create_task(
    srid: Srid,
    assignment_id: AssignmentId,
    request: TaskCreate,
    service: TaskServiceDep,
    _principal: UserPrincipal,
) -> TaskRead:
    task = await service.create_task(srid, assignment_id, request)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    description="Overwrite the task's mutable fields. A task ID in the body is ignored.",
    responses=_PARENT_MISSING,
)
async def update_task(
    srid: Srid,
    assignment_id: AssignmentId,
    task_id: TaskId,
    request: TaskUpdate,
    service: TaskServiceDep,
    _principal: UserPrincipal,
) -> TaskRead:
    task = await service.update_task(srid, assignment_id, task_id, request)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
    description="Requires ADMIN.",
    responses=_PARENT_MISSING,
)
async def delete_task(
    srid: Srid,
    assignment_id: AssignmentId,
    task_id: TaskId,
    service: TaskServiceDep,
    _principal: AdminPrincipal,
) -> None:
    await service.delete_task(srid, assignment_id, task_id)

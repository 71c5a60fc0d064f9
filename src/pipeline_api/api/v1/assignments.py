"""Assignment endpoints - scoped CRUD over the assignment aggregate."""

from fastapi import APIRouter, status

from src.pipeline_api.api.dependencies import AdminPrincipal, AssignmentServiceDep, UserPrincipal
from src.pipeline_api.api.v1.params import ApplicationFilter, AssignmentId, Srid, StatusFilter
from src.pipeline_api.schemas.assignment import AssignmentCreate, AssignmentRead, AssignmentUpdate

router = APIRouter(prefix="/{srid}/assignments", tags=["assignments"])


@router.get(
    "",
    response_model=list[AssignmentRead],
    summary="List assignments",
    description="List assignments in a scope, optionally filtered by application and status.",
)
async def list_assignments(
    srid: Srid,
    service: AssignmentServiceDep,
    _principal: UserPrincipal,
    application: ApplicationFilter = None,
    status_: StatusFilter = None,
) -> list[AssignmentRead]:
    assignments = await service.list_assignments(srid, application=application, status=status_)
    return [AssignmentRead.model_validate(a) for a in assignments]


@router.get(
    "/{assignment_id}",
    response_model=AssignmentRead,
    summary="Get assignment",
    responses={404: {"description": "Assignment not found"}},
)
async def get_assignment(
    srid: Srid,
    assignment_id: AssignmentId,
    service: AssignmentServiceDep,
    _principal: UserPrincipal,
) -> AssignmentRead:
    assignment = await service.get_assignment(srid, assignment_id)
    return AssignmentRead.model_validate(assignment)


@router.post(
    "",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create assignment",
    description="Create an assignment and its initial tasks. The scope comes from the path.",
    responses={
        201: {"description": "Assignment created"},
        409: {"description": "Assignment ID already exists in this scope"},
    },
)
async def create_assignment(
    srid: Srid,
    request: AssignmentCreate,
    service: AssignmentServiceDep,
    _principal: UserPrincipal,
) -> AssignmentRead:
    assignment = await service.create_assignment(srid, request)
    return AssignmentRead.model_validate(assignment)


@router.put(
    "/{assignment_id}",
    response_model=AssignmentRead,
    summary="Update assignment",
    description=(
        "Overwrite the assignment's mutable fields. When `tasks` is supplied the "
        "existing tasks are replaced by it."
    ),
    responses={
        404: {"description": "Assignment not found"},
        409: {"description": "Duplicate task IDs in payload"},
    },
)
async def update_assignment(
    srid: Srid,
    assignment_id: AssignmentId,
    request: AssignmentUpdate,
    service: AssignmentServiceDep,
    _principal: UserPrincipal,
) -> AssignmentRead:
    assignment = await service.update_assignment(srid, assignment_id, request)
    return AssignmentRead.model_validate(assignment)


@router.delete(
    "/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete assignment",
    description="Delete an assignment together with its tasks. Requires ADMIN.",
    responses={
        204: {"description": "Assignment deleted"},
        404: {"description": "Assignment not found"},
    },
)
async def delete_assignment(
    srid: Srid,
    assignment_id: AssignmentId,
    service: AssignmentServiceDep,
    _principal: AdminPrincipal,
) -> None:
    await service.delete_assignment(srid, assignment_id)

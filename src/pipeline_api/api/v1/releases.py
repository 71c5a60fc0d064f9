"""Release endpoints - scoped CRUD over the release aggregate plus deploy."""

from fastapi import APIRouter, status

from src.pipeline_api.api.dependencies import AdminPrincipal, ReleaseServiceDep, UserPrincipal
from src.pipeline_api.api.v1.params import ApplicationFilter, ReleaseId, Srid, StatusFilter
from src.pipeline_api.schemas.release import (
    DeployRequest,
    ReleaseCreate,
    ReleaseRead,
    ReleaseUpdate,
)

router = APIRouter(prefix="/{srid}/releases", tags=["releases"])


@router.get(
    "",
    response_model=list[ReleaseRead],
    summary="List releases",
    description="List releases in a scope, optionally filtered by application and status.",
)
async def list_releases(
    srid: Srid,
    service: ReleaseServiceDep,
    _principal: UserPrincipal,
    application: ApplicationFilter = None,
    status_: StatusFilter = None,
) -> list[ReleaseRead]:
    releases = await service.list_releases(srid, application=application, status=status_)
    return [ReleaseRead.model_validate(r) for r in releases]


@router.get(
    "/{release_id}",
    response_model=ReleaseRead,
    summary="Get release",
    responses={404: {"description": "Release not found"}},
)
async def get_release(
    srid: Srid,
    release_id: ReleaseId,
    service: ReleaseServiceDep,
    _principal: UserPrincipal,
) -> ReleaseRead:
    release = await service.get_release(srid, release_id)
    return ReleaseRead.model_validate(release)


@router.post(
    "",
    response_model=ReleaseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create release",
    description="Create a release and its initial sets. The scope comes from the path.",
    responses={
        201: {"description": "Release created"},
        409: {"description": "Release ID already exists in this scope"},
    },
)
async def create_release(
    srid: Srid,
    request: ReleaseCreate,
    service: ReleaseServiceDep,
    _principal: UserPrincipal,
) -> ReleaseRead:
    release = await service.create_release(srid, request)
    return ReleaseRead.model_validate(release)


@router.put(
    "/{release_id}",
    response_model=ReleaseRead,
    summary="Update release",
    description=(
        "Overwrite the release's mutable fields. When `sets` is supplied the "
        "existing sets are replaced by it."
    ),
    responses={
        404: {"description": "Release not found"},
        409: {"description": "Duplicate set IDs in payload"},
    },
)
async def update_release(
    srid: Srid,
    release_id: ReleaseId,
    request: ReleaseUpdate,
    service: ReleaseServiceDep,
    _principal: UserPrincipal,
) -> ReleaseRead:
    release = await service.update_release(srid, release_id, request)
    return ReleaseRead.model_validate(release)


@router.delete(
    "/{release_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete release",
    description="Delete a release together with its sets. Requires ADMIN.",
    responses={
        204: {"description": "Release deleted"},
        404: {"description": "Release not found"},
    },
)
async def delete_release(
    srid: Srid,
    release_id: ReleaseId,
    service: ReleaseServiceDep,
    _principal: AdminPrincipal,
) -> None:
    await service.delete_release(srid, release_id)


@router.post(
    "/{release_id}/deploy",
    response_model=ReleaseRead,
    summary="Deploy release",
    description=(
        "Mark the release DEPLOY_IN_PROGRESS and record the deployment as a new "
        "set in IN_PROGRESS. Nothing is executed."
    ),
    responses={404: {"description": "Release not found"}},
)
async def deploy_release(
    srid: Srid,
    release_id: ReleaseId,
    request: DeployRequest,
    service: ReleaseServiceDep,
    _principal: UserPrincipal,
) -> ReleaseRead:
    release = await service.deploy_release(srid, release_id, request)
    return ReleaseRead.model_validate(release)

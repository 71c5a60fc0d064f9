"""Release set endpoints.

Sets are listed and read across a whole scope, but created, changed and
removed through their release.
"""

from fastapi import APIRouter, status

from src.pipeline_api.api.dependencies import AdminPrincipal, ReleaseSetServiceDep, UserPrincipal
from src.pipeline_api.api.v1.params import ReleaseId, SetId, Srid
from src.pipeline_api.schemas.release import (
    DeployRequest,
    ReleaseSetCreate,
    ReleaseSetRead,
    ReleaseSetUpdate,
)

router = APIRouter(prefix="/{srid}/sets", tags=["sets"])


@router.get(
    "",
    response_model=list[ReleaseSetRead],
    summary="List sets",
    description="List the sets of every release in the scope.",
)
async def list_sets(
    srid: Srid,
    service: ReleaseSetServiceDep,
    _principal: UserPrincipal,
) -> list[ReleaseSetRead]:
    sets = await service.list_sets(srid)
    return [ReleaseSetRead.model_validate(s) for s in sets]


@router.get(
    "/{set_id}",
    response_model=ReleaseSetRead,
    summary="Get set",
    responses={404: {"description": "Set not found in this scope"}},
)
async def get_set(
    srid: Srid,
    set_id: SetId,
    service: ReleaseSetServiceDep,
    _principal: UserPrincipal,
) -> ReleaseSetRead:
    release_set = await service.get_set(srid, set_id)
    return ReleaseSetRead.model_validate(release_set)


@router.post(
    "/{release_id}",
    response_model=ReleaseSetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create set",
    responses={
        201: {"description": "Set created"},
        404: {"description": "Release not found"},
        409: {"description": "Set ID already exists in this release"},
    },
)
async def create_set(
    srid: Srid,
    release_id: ReleaseId,
    request: ReleaseSetCreate,
    service: ReleaseSetServiceDep,
    _principal: UserPrincipal,
) -> ReleaseSetRead:
    release_set = await service.create_set(srid, release_id, request)
    return ReleaseSetRead.model_validate(release_set)


@router.put(
    "/{release_id}/{set_id}",
    response_model=ReleaseSetRead,
    summary="Update set",
    description="Overwrite the set's mutable fields. A set ID in the body is ignored.",
    responses={404: {"description": "Release or set not found"}},
)
async def update_set(
    srid: Srid,
    release_id: ReleaseId,
    set_id: SetId,
    request: ReleaseSetUpdate,
    service: ReleaseSetServiceDep,
    _principal: UserPrincipal,
) -> ReleaseSetRead:
    release_set = await service.update_set(srid, release_id, set_id, request)
    return ReleaseSetRead.model_validate(release_set)


@router.delete(
    "/{release_id}/{set_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete set",
    description="Requires ADMIN.",
    responses={404: {"description": "Release or set not found"}},
)
async def delete_set(
    srid: Srid,
    release_id: ReleaseId,
    set_id: SetId,
    service: ReleaseSetServiceDep,
    _principal: AdminPrincipal,
) -> None:
    await service.delete_set(srid, release_id, set_id)


@router.post(
    "/{set_id}/deploy",
    response_model=ReleaseSetRead,
    summary="Deploy set",
    description="Mark the set DEPLOY_IN_PROGRESS on behalf of the caller. Nothing is executed.",
    responses={404: {"description": "Set not found in this scope"}},
)
async def deploy_set(
    srid: Srid,
    set_id: SetId,
    request: DeployRequest,
    service: ReleaseSetServiceDep,
    principal: UserPrincipal,
) -> ReleaseSetRead:
    release_set = await service.deploy_set(srid, set_id, request, deployed_by=principal.username)
    return ReleaseSetRead.model_validate(release_set)

"""Release and release set services, including the deploy transitions."""

import time
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from src.pipeline_api.core.exceptions import ConflictError, NotFoundError
from src.pipeline_api.core.logging import get_logger
from src.pipeline_api.models import SYSTEM_DEPLOYER, DeploymentStatus, Release, ReleaseSet
from src.pipeline_api.models.base import touch, utc_now
from src.pipeline_api.repositories import ReleaseRepository, ReleaseSetRepository
from src.pipeline_api.schemas.release import (
    DeployRequest,
    ReleaseCreate,
    ReleaseFields,
    ReleaseSetCreate,
    ReleaseSetFields,
    ReleaseSetUpdate,
    ReleaseUpdate,
)
from src.pipeline_api.services.common import commit_or_conflict, ensure_unique_keys

logger = get_logger(__name__)

UNSPECIFIED_ENVIRONMENT = "unspecified"


def generate_set_id(existing: Iterable[str], now_ms: int | None = None) -> str:
    """Generate ``SET-<epoch millis>``, suffixed ``-1``, ``-2``... on collision."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    taken = set(existing)
    base = f"SET-{now_ms}"
    candidate = base
    suffix = 1
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def _build_sets(payload: list[ReleaseSetCreate], release_id: str) -> list[ReleaseSet]:
    ensure_unique_keys((s.set_id for s in payload), "Release set", f"release {release_id}")
    return [ReleaseSet(**s.model_dump()) for s in payload]


class ReleaseService:
    """Release aggregate service - a release owns its sets."""

    def __init__(self, release_repo: ReleaseRepository, session: AsyncSession):
        self.release_repo = release_repo
        self.session = session

    async def list_releases(
        self,
        srid: str,
        application: str | None = None,
        status: str | None = None,
    ) -> list[Release]:
        """List releases in scope. Blank filters are ignored."""
        return await self.release_repo.list_by_srid(
            srid, {"application": application, "status": status}
        )

    async def get_release(self, srid: str, release_id: str) -> Release:
        """Get a release by natural key.

        Raises:
            NotFoundError: If no such release exists in scope
        """
        release = await self.release_repo.get_by_release_id(srid, release_id)
        if release is None:
            raise NotFoundError(f"Release not found with id: {release_id}")
        return release

    async def create_release(self, srid: str, data: ReleaseCreate) -> Release:
        """Create a release together with its initial sets.

        Raises:
            ConflictError: If the release_id is taken in scope, or the
                payload repeats a set_id
        """
        detail = f"Release with id {data.release_id} already exists in srid {srid}"
        if await self.release_repo.exists_by_release_id(srid, data.release_id):
            raise ConflictError(detail)
        sets = _build_sets(data.sets, data.release_id)

        release = Release(**data.model_dump(exclude={"sets"}), srid=srid, sets=sets)
        self.release_repo.add(release)
        await commit_or_conflict(self.session, detail)
        logger.info(
            "Release created", srid=srid, release_id=release.release_id, set_count=len(sets)
        )
        return release

    async def update_release(self, srid: str, release_id: str, data: ReleaseUpdate) -> Release:
        """Overwrite the mutable fields; replace sets when a list is supplied."""
        release = await self.get_release(srid, release_id)

        for field in ReleaseFields.model_fields:
            setattr(release, field, getattr(data, field))
        touch(release)

        if data.sets is not None:
            sets = _build_sets(data.sets, release_id)
            await self.release_repo.replace_sets(release, sets)

        await commit_or_conflict(
            self.session, f"Set ids must be unique within release {release_id}"
        )
        return release

    async def delete_release(self, srid: str, release_id: str) -> None:
        """Delete a release and, by cascade, its sets."""
        release = await self.get_release(srid, release_id)
        await self.release_repo.delete(release)
        await self.session.commit()
        logger.info("Release deleted", srid=srid, release_id=release_id)

    async def deploy_release(self, srid: str, release_id: str, request: DeployRequest) -> Release:
        """Mark a release as deploying and record the deployment as a new set.

        No deployment is executed; a ``deployment.requested`` event is logged
        for whatever picks deployments up.
        """
        release = await self.get_release(srid, release_id)
        environment = request.environment or UNSPECIFIED_ENVIRONMENT
        description = f"Deployment to {environment}"
        if request.description:
            description = f"{description} - {request.description}"

        release_set = ReleaseSet(
            set_id=generate_set_id(s.set_id for s in release.sets),
            status=DeploymentStatus.IN_PROGRESS.value,
            deployment_status=DeploymentStatus.IN_PROGRESS.value,
            owner=f"{environment}-deployer",
            description=description,
            deployed_by=SYSTEM_DEPLOYER,
        )
        release.status = DeploymentStatus.DEPLOY_IN_PROGRESS.value
        touch(release)
        release.sets.append(release_set)

        await commit_or_conflict(
            self.session, f"Set {release_set.set_id} already exists in release {release_id}"
        )
        logger.info(
            "deployment.requested",
            srid=srid,
            release_id=release_id,
            set_id=release_set.set_id,
            environment=environment,
            level=request.level,
            auto_deploy=request.auto_deploy,
            deployed_by=SYSTEM_DEPLOYER,
        )
        return release


class ReleaseSetService:
    """Release sets, addressed through their release or across a scope."""

    def __init__(
        self,
        release_repo: ReleaseRepository,
        set_repo: ReleaseSetRepository,
        session: AsyncSession,
    ):
        self.release_repo = release_repo
        self.set_repo = set_repo
        self.session = session

    async def _get_release(self, srid: str, release_id: str) -> Release:
        release = await self.release_repo.get_by_release_id(srid, release_id)
        if release is None:
            raise NotFoundError(f"Release not found with id: {release_id}")
        return release

    async def _get_set(self, release: Release, set_id: str) -> ReleaseSet:
        release_set = await self.set_repo.get_by_set_id(release.id, set_id)
        if release_set is None:
            raise NotFoundError(f"Release set not found with id: {set_id}")
        return release_set

    async def list_sets(self, srid: str) -> list[ReleaseSet]:
        """List the sets of every release in scope."""
        return await self.set_repo.list_by_srid(srid)

    async def get_set(self, srid: str, set_id: str) -> ReleaseSet:
        """Get a set by set_id within scope.

        Raises:
            NotFoundError: If no release in scope has such a set
        """
        release_set = await self.set_repo.get_by_set_id_in_scope(srid, set_id)
        if release_set is None:
            raise NotFoundError(f"Release set not found with id: {set_id}")
        return release_set

    async def create_set(self, srid: str, release_id: str, data: ReleaseSetCreate) -> ReleaseSet:
        """Attach a new set to a release.

        Raises:
            NotFoundError: If the release does not exist in scope
            ConflictError: If the set_id is taken within the release
        """
        release = await self._get_release(srid, release_id)
        detail = f"Release set with id {data.set_id} already exists in release {release_id}"
        if await self.set_repo.exists_by_set_id(release.id, data.set_id):
            raise ConflictError(detail)

        release_set = ReleaseSet(**data.model_dump())
        release.sets.append(release_set)
        await commit_or_conflict(self.session, detail)
        return release_set

    async def update_set(
        self, srid: str, release_id: str, set_id: str, data: ReleaseSetUpdate
    ) -> ReleaseSet:
        """Overwrite a set's mutable fields. The path set_id is authoritative."""
        release = await self._get_release(srid, release_id)
        release_set = await self._get_set(release, set_id)

        for field in ReleaseSetFields.model_fields:
            setattr(release_set, field, getattr(data, field))
        touch(release_set)

        await self.session.commit()
        return release_set

    async def delete_set(self, srid: str, release_id: str, set_id: str) -> None:
        release = await self._get_release(srid, release_id)
        release_set = await self._get_set(release, set_id)
        await self.set_repo.delete(release_set)
        await self.session.commit()

    async def deploy_set(
        self,
        srid: str,
        set_id: str,
        request: DeployRequest,
        deployed_by: str | None = None,
    ) -> ReleaseSet:
        """Mark a set as deploying on behalf of the caller."""
        release_set = await self.get_set(srid, set_id)
        deployer = deployed_by or SYSTEM_DEPLOYER

        now = utc_now()
        release_set.status = DeploymentStatus.DEPLOY_IN_PROGRESS.value
        release_set.deployment_status = DeploymentStatus.IN_PROGRESS.value
        release_set.deployed_by = deployer
        release_set.deployed_at = now
        release_set.updated_at = now
        await self.session.commit()

        logger.info(
            "deployment.requested",
            srid=srid,
            set_id=set_id,
            environment=request.environment or UNSPECIFIED_ENVIRONMENT,
            level=request.level,
            auto_deploy=request.auto_deploy,
            deployed_by=deployer,
        )
        return release_set

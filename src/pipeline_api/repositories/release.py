"""Repositories for the Release aggregate."""

from collections.abc import Mapping
from uuid import UUID

from sqlmodel import select

from src.pipeline_api.models import Release, ReleaseSet
from src.pipeline_api.repositories.base import BaseRepository


class ReleaseRepository(BaseRepository[Release]):
    """Repository for Release entity, keyed by (srid, release_id)."""

    model = Release
    filter_columns = {
        "application": Release.application,
        "status": Release.status,
    }

    async def get_by_release_id(self, srid: str, release_id: str) -> Release | None:
        """Get release by natural key within scope."""
        result = await self.session.execute(
            select(Release).where(Release.srid == srid, Release.release_id == release_id)
        )
        return result.scalar_one_or_none()

    async def exists_by_release_id(self, srid: str, release_id: str) -> bool:
        """Check if a release with the given natural key exists in scope."""
        return await self.exists_where(Release.srid == srid, Release.release_id == release_id)

    async def list_by_srid(
        self, srid: str, filters: Mapping[str, str | None] | None = None
    ) -> list[Release]:
        """List releases in scope, optionally narrowed by filters."""
        query = select(Release).where(Release.srid == srid)
        query = self.apply_filters(query, filters or {})
        query = query.order_by(Release.created_at, Release.id)  # type: ignore[arg-type]
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def replace_sets(self, release: Release, sets: list[ReleaseSet]) -> None:
        """Swap the release's set collection for a fresh one.

        Existing sets are orphan-deleted and flushed before the new ones are
        attached, so a reused set_id does not collide with its predecessor.
        """
        release.sets.clear()
        await self.session.flush()
        release.sets.extend(sets)


class ReleaseSetRepository(BaseRepository[ReleaseSet]):
    """Repository for ReleaseSet entity, keyed by (release, set_id)."""

    model = ReleaseSet

    async def get_by_set_id(self, release_pk: UUID, set_id: str) -> ReleaseSet | None:
        """Get set by natural key within its release."""
        result = await self.session.execute(
            select(ReleaseSet).where(
                ReleaseSet.release_pk == release_pk,
                ReleaseSet.set_id == set_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists_by_set_id(self, release_pk: UUID, set_id: str) -> bool:
        """Check if a set with the given natural key exists in the release."""
        return await self.exists_where(
            ReleaseSet.release_pk == release_pk, ReleaseSet.set_id == set_id
        )

    async def get_by_set_id_in_scope(self, srid: str, set_id: str) -> ReleaseSet | None:
        """Get a set by set_id across every release in scope.

        set_id is only unique per release, so the oldest match wins.
        """
        result = await self.session.execute(
            select(ReleaseSet)
            .join(Release, ReleaseSet.release_pk == Release.id)  # type: ignore[arg-type]
            .where(Release.srid == srid, ReleaseSet.set_id == set_id)
            .order_by(ReleaseSet.created_at, ReleaseSet.id)  # type: ignore[arg-type]
            .limit(1)
        )
        return result.scalars().first()

    async def list_by_srid(self, srid: str) -> list[ReleaseSet]:
        """List the sets of every release in scope."""
        result = await self.session.execute(
            select(ReleaseSet)
            .join(Release, ReleaseSet.release_pk == Release.id)  # type: ignore[arg-type]
            .where(Release.srid == srid)
            .order_by(ReleaseSet.created_at, ReleaseSet.id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

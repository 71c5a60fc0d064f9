"""Tests for scoped release CRUD and release deployment."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.pipeline_api.models import ReleaseSet
from tests.helpers import create_release

pytestmark = pytest.mark.integration

BASE = "/api/v1/{srid}/releases"


def _new_sets(release: dict, before: set[str]) -> list[dict]:
    return [s for s in release["sets"] if s["set_id"] not in before]


async def test_create_release_with_sets(client: AsyncClient, alice_headers):
    response = await client.post(
        BASE.format(srid="PRJ1"),
        json={
            "release_id": "R1",
            "application": "PLAY",
            "description": "Q3",
            "sets": [{"set_id": "S1", "status": "OPEN"}],
        },
        headers=alice_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["release_id"] == "R1"
    assert data["srid"] == "PRJ1"
    assert [s["set_id"] for s in data["sets"]] == ["S1"]


async def test_duplicate_release_conflicts_only_in_scope(client: AsyncClient, alice_headers):
    payload = {"release_id": "R1"}

    first = await client.post(BASE.format(srid="PRJ1"), json=payload, headers=alice_headers)
    dup = await client.post(BASE.format(srid="PRJ1"), json=payload, headers=alice_headers)
    other = await client.post(BASE.format(srid="PRJ2"), json=payload, headers=alice_headers)

    assert first.status_code == 201
    assert dup.status_code == 409
    assert dup.json()["detail"] == "Release with id R1 already exists in srid PRJ1"
    assert other.status_code == 201


async def test_list_filters_ignore_blank_values(
    client: AsyncClient, db_session: AsyncSession, alice_headers
):
    await create_release(db_session, release_id="R1", application="PLAY", status="OPEN")
    await create_release(db_session, release_id="R2", application="WORK", status="OPEN")

    filtered = await client.get(
        BASE.format(srid="PRJ1"), params={"application": "WORK"}, headers=alice_headers
    )
    blank = await client.get(
        BASE.format(srid="PRJ1"), params={"application": " ", "status": ""}, headers=alice_headers
    )

    assert [r["release_id"] for r in filtered.json()] == ["R2"]
    assert sorted(r["release_id"] for r in blank.json()) == ["R1", "R2"]


async def test_update_replaces_sets_when_given(
    client: AsyncClient, db_session: AsyncSession, alice_headers
):
    await create_release(db_session, release_id="R1", set_ids=("S1", "S2"))
    url = f"{BASE.format(srid='PRJ1')}/R1"

    kept = await client.put(url, json={"status": "FROZEN"}, headers=alice_headers)
    replaced = await client.put(
        url, json={"status": "FROZEN", "sets": [{"set_id": "S3"}]}, headers=alice_headers
    )

    assert sorted(s["set_id"] for s in kept.json()["sets"]) == ["S1", "S2"]
    assert [s["set_id"] for s in replaced.json()["sets"]] == ["S3"]
    assert replaced.json()["status"] == "FROZEN"


async def test_delete_release_cascades_to_sets(
    client: AsyncClient, db_session: AsyncSession, alice_headers, admin_headers
):
    await create_release(db_session, release_id="R1", set_ids=("S1", "S2"))
    url = f"{BASE.format(srid='PRJ1')}/R1"

    denied = await client.delete(url, headers=alice_headers)
    deleted = await client.delete(url, headers=admin_headers)

    assert denied.status_code == 403
    assert deleted.status_code == 204
    assert (await client.get(url, headers=alice_headers)).status_code == 404
    count = (await db_session.execute(select(func.count()).select_from(ReleaseSet))).scalar_one()
    assert count == 0


class TestDeployRelease:
    async def test_deploy_marks_release_and_records_set(
        self, client: AsyncClient, db_session: AsyncSession, alice_headers
    ):
        await create_release(db_session, release_id="R1", status="OPEN", set_ids=("S1",))

        response = await client.post(
            f"{BASE.format(srid='PRJ1')}/R1/deploy",
            json={"environment": "prod", "level": "PRD", "description": "hotfix"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "DEPLOY_IN_PROGRESS"
        assert len(data["sets"]) == 2

        (new_set,) = _new_sets(data, {"S1"})
        assert new_set["set_id"].startswith("SET-")
        assert new_set["status"] == "IN_PROGRESS"
        assert new_set["deployment_status"] == "IN_PROGRESS"
        assert new_set["owner"] == "prod-deployer"
        assert new_set["description"] == "Deployment to prod - hotfix"
        assert new_set["deployed_by"] == "system"

    async def test_deploy_without_environment(
        self, client: AsyncClient, db_session: AsyncSession, alice_headers
    ):
        await create_release(db_session, release_id="R1")

        response = await client.post(
            f"{BASE.format(srid='PRJ1')}/R1/deploy", json={}, headers=alice_headers
        )

        (new_set,) = _new_sets(response.json(), set())
        assert new_set["owner"] == "unspecified-deployer"
        assert new_set["description"] == "Deployment to unspecified"

    async def test_repeated_deploys_get_distinct_set_ids(
        self, client: AsyncClient, db_session: AsyncSession, alice_headers
    ):
        await create_release(db_session, release_id="R1")
        url = f"{BASE.format(srid='PRJ1')}/R1/deploy"

        await client.post(url, json={"environment": "qa"}, headers=alice_headers)
        response = await client.post(url, json={"environment": "qa"}, headers=alice_headers)

        set_ids = [s["set_id"] for s in response.json()["sets"]]
        assert len(set_ids) == 2
        assert len(set(set_ids)) == 2

    async def test_deploy_missing_release_not_found(self, client: AsyncClient, alice_headers):
        response = await client.post(
            f"{BASE.format(srid='PRJ1')}/NOPE/deploy", json={}, headers=alice_headers
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Release not found with id: NOPE"

"""Test helper functions for tokens and common data creation patterns."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from src.pipeline_api.core.config import get_settings
from src.pipeline_api.models import Assignment, Message, Release
from tests.factories import (
    AssignmentFactory,
    MessageFactory,
    ReleaseFactory,
    ReleaseSetFactory,
    TaskFactory,
)


def make_token(
    username: str = "alice",
    roles: tuple[str, ...] = ("ROLE_USER",),
    client_roles: dict[str, list[str]] | None = None,
    expires_in: timedelta = timedelta(minutes=5),
    secret: str | None = None,
    **extra_claims: Any,
) -> str:
    """Issue a Keycloak-shaped JWT signed with the test secret.

    Args:
        username: Value of the preferred_username claim
        roles: Realm roles (realm_access.roles)
        client_roles: Client roles keyed by client id (resource_access)
        expires_in: Lifetime; negative values produce an expired token
        secret: Signing key override, e.g. to forge an invalid signature
    """
    settings = get_settings()
    now = datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": f"sub-{username}",
        "preferred_username": username,
        "iat": now,
        "exp": now + expires_in,
        "realm_access": {"roles": list(roles)},
    }
    if client_roles is not None:
        claims["resource_access"] = {
            client: {"roles": client_role_list} for client, client_role_list in client_roles.items()
        }
    claims.update(extra_claims)
    return jwt.encode(
        claims, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


async def create_assignment(
    session: AsyncSession,
    srid: str = "PRJ1",
    task_ids: tuple[str, ...] = (),
    **assignment_kwargs: Any,
) -> Assignment:
    """Persist an assignment with tasks.

    Args:
        session: Database session
        srid: Scope of the assignment
        task_ids: Natural keys of the tasks to attach
        **assignment_kwargs: Additional args passed to AssignmentFactory
    """
    assignment = AssignmentFactory.build(srid=srid, **assignment_kwargs)
    assignment.tasks = [TaskFactory.build(task_id=task_id) for task_id in task_ids]
    session.add(assignment)
    await session.commit()
    return assignment


async def create_release(
    session: AsyncSession,
    srid: str = "PRJ1",
    set_ids: tuple[str, ...] = (),
    **release_kwargs: Any,
) -> Release:
    """Persist a release with sets."""
    release = ReleaseFactory.build(srid=srid, **release_kwargs)
    release.sets = [ReleaseSetFactory.build(set_id=set_id) for set_id in set_ids]
    session.add(release)
    await session.commit()
    return release


async def create_message(session: AsyncSession, **message_kwargs: Any) -> Message:
    """Persist a message. The ORM assigns version 1."""
    message = MessageFactory.build(**message_kwargs)
    session.add(message)
    await session.commit()
    return message

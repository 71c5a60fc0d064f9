"""Tests for message ownership and optimistic locking in MessageService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.orm.exc import StaleDataError

from src.pipeline_api.core.exceptions import (
    NotFoundError,
    OptimisticConflictError,
    PermissionDeniedError,
    ValidationFailedError,
)
from src.pipeline_api.repositories import MessageRepository
from src.pipeline_api.schemas.message import MessageCreate, MessageUpdate
from src.pipeline_api.services import MessageService
from tests.factories import MessageFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def session() -> AsyncMock:
    mock = AsyncMock()
    mock.add = MagicMock()
    return mock


@pytest.fixture
def repo() -> MagicMock:
    mock = MagicMock(spec=MessageRepository)
    mock.get_by_id = AsyncMock(return_value=None)
    mock.delete = AsyncMock()
    mock.list_page = AsyncMock(return_value=([], 0))
    mock.search = AsyncMock(return_value=([], 0))
    mock.order_clauses = MessageRepository.order_clauses
    return mock


@pytest.fixture
def service(repo: MagicMock, session: AsyncMock) -> MessageService:
    return MessageService(repo, session)


async def test_create_uses_caller_as_sender(service, repo, session):
    message = await service.create_message(MessageCreate(content="Hello"), sender="alice")

    assert message.sender == "alice"
    assert message.content == "Hello"
    repo.add.assert_called_once_with(message)
    session.commit.assert_awaited_once()


async def test_update_missing_message_not_found(service):
    message_id = uuid4()
    with pytest.raises(NotFoundError, match=f"Message not found with id: {message_id}"):
        await service.update_message(message_id, MessageUpdate(content="x"), username="alice")


async def test_update_by_other_user_denied(service, repo, session):
    message = MessageFactory.build(sender="alice", version=1)
    repo.get_by_id.return_value = message

    with pytest.raises(PermissionDeniedError, match="You can only update your own messages"):
        await service.update_message(message.id, MessageUpdate(content="mine now"), username="bob")

    assert message.content != "mine now"
    session.commit.assert_not_awaited()


async def test_update_with_stale_version_conflicts(service, repo, session):
    message = MessageFactory.build(sender="alice", version=3)
    repo.get_by_id.return_value = message

    with pytest.raises(OptimisticConflictError, match="expected version 2, found 3"):
        await service.update_message(
            message.id, MessageUpdate(content="late", version=2), username="alice"
        )

    session.commit.assert_not_awaited()


async def test_update_without_version_skips_check(service, repo, session):
    message = MessageFactory.build(sender="alice", version=3)
    repo.get_by_id.return_value = message

    updated = await service.update_message(
        message.id, MessageUpdate(content="edited"), username="alice"
    )

    assert updated.content == "edited"
    session.commit.assert_awaited_once()


async def test_concurrent_commit_maps_to_conflict(service, repo, session):
    message = MessageFactory.build(sender="alice", version=1)
    repo.get_by_id.return_value = message
    session.commit.side_effect = StaleDataError("0 rows matched")

    with pytest.raises(OptimisticConflictError, match="modified by another request"):
        await service.update_message(
            message.id, MessageUpdate(content="edited", version=1), username="alice"
        )

    session.rollback.assert_awaited_once()


async def test_delete_by_other_user_denied(service, repo):
    message = MessageFactory.build(sender="alice", version=1)
    repo.get_by_id.return_value = message

    with pytest.raises(PermissionDeniedError, match="You can only delete your own messages"):
        await service.delete_message(message.id, username="bob")

    repo.delete.assert_not_awaited()


async def test_delete_own_message(service, repo, session):
    message = MessageFactory.build(sender="alice", version=1)
    repo.get_by_id.return_value = message

    await service.delete_message(message.id, username="alice")

    repo.delete.assert_awaited_once_with(message)
    session.commit.assert_awaited_once()


async def test_unsupported_sort_is_validation_error(service, repo):
    with pytest.raises(ValidationFailedError, match="Unsupported sort field"):
        await service.list_messages(0, 20, sort="password,asc")
    repo.list_page.assert_not_awaited()


async def test_search_passes_order_and_paging(service, repo):
    await service.search_messages("spring", 1, 5, sort="sender")

    args = repo.search.await_args.args
    assert args[:3] == ("spring", 1, 5)
    assert len(args[3]) == 2

"""Message endpoints - paginated CRUD and search; only senders may change their messages."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.pipeline_api.api.dependencies import MessageServiceDep, UserPrincipal
from src.pipeline_api.core.config import get_settings
from src.pipeline_api.schemas.message import MessageCreate, MessageRead, MessageUpdate
from src.pipeline_api.schemas.pagination import PageResponse

router = APIRouter(prefix="/messages", tags=["messages"])

_settings = get_settings()

Page = Annotated[int, Query(ge=0, description="Zero-based page index")]
Size = Annotated[
    int,
    Query(ge=1, le=_settings.message_max_page_size, description="Items per page"),
]
Sort = Annotated[
    str | None,
    Query(
        description="`field[,asc|desc]` over created_at, updated_at, sender, content",
        examples=["created_at,desc"],
    ),
]


@router.get(
    "",
    response_model=PageResponse[MessageRead],
    summary="List messages",
    responses={400: {"description": "Unsupported sort parameter"}},
)
async def list_messages(
    service: MessageServiceDep,
    _principal: UserPrincipal,
    page: Page = 0,
    size: Size = _settings.message_page_size,
    sort: Sort = None,
    sender: Annotated[str | None, Query(description="Only this sender's messages")] = None,
) -> PageResponse[MessageRead]:
    messages, total = await service.list_messages(page, size, sort=sort, sender=sender)
    return PageResponse.build(
        [MessageRead.model_validate(m) for m in messages], page, size, total
    )


@router.get(
    "/search",
    response_model=PageResponse[MessageRead],
    summary="Search messages",
    description="Case-insensitive substring search over message content.",
)
async def search_messages(
    service: MessageServiceDep,
    _principal: UserPrincipal,
    query: Annotated[str, Query(min_length=1, max_length=500)],
    page: Page = 0,
    size: Size = _settings.message_page_size,
    sort: Sort = None,
) -> PageResponse[MessageRead]:
    messages, total = await service.search_messages(query, page, size, sort=sort)
    return PageResponse.build(
        [MessageRead.model_validate(m) for m in messages], page, size, total
    )


@router.get(
    "/{message_id}",
    response_model=MessageRead,
    summary="Get message",
    responses={404: {"description": "Message not found"}},
)
async def get_message(
    message_id: UUID,
    service: MessageServiceDep,
    _principal: UserPrincipal,
) -> MessageRead:
    message = await service.get_message(message_id)
    return MessageRead.model_validate(message)


@router.post(
    "",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create message",
    description="The sender is the authenticated caller.",
)
async def create_message(
    request: MessageCreate,
    service: MessageServiceDep,
    principal: UserPrincipal,
) -> MessageRead:
    message = await service.create_message(request, sender=principal.username)
    return MessageRead.model_validate(message)


@router.put(
    "/{message_id}",
    response_model=MessageRead,
    summary="Update message",
    description="Only the sender may update. Pass the last seen `version` to detect lost updates.",
    responses={
        403: {"description": "Caller is not the sender"},
        404: {"description": "Message not found"},
        409: {"description": "Message was modified concurrently"},
    },
)
async def update_message(
    message_id: UUID,
    request: MessageUpdate,
    service: MessageServiceDep,
    principal: UserPrincipal,
) -> MessageRead:
    message = await service.update_message(message_id, request, username=principal.username)
    return MessageRead.model_validate(message)


@router.delete(
    "/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete message",
    description="Only the sender may delete.",
    responses={
        403: {"description": "Caller is not the sender"},
        404: {"description": "Message not found"},
    },
)
async def delete_message(
    message_id: UUID,
    service: MessageServiceDep,
    principal: UserPrincipal,
) -> None:
    await service.delete_message(message_id, username=principal.username)

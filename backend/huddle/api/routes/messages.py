"""Message Routes — post, edit, delete, recent, paginated.

Invariants:
    - Non-member post -> 403 NOT_A_MEMBER; non-sender edit/delete -> 403 NOT_OWNER
    - Unknown message -> 404 MESSAGE_NOT_FOUND (distinct from 403)
    - Listings newest first; page is zero-based
"""

from fastapi import APIRouter, Depends, Query, status

from huddle.api.dependencies import get_current_identity, get_message_ledger
from huddle.config import get_settings
from huddle.core.domain_types import ChannelId, Identity, MessageId
from huddle.schemas.auth import StatusMessage
from huddle.schemas.message import (
    MessageCreate, MessagePageView, MessageUpdate, MessageView,
)
from huddle.services.message_ledger import MessageLedger

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("/channel/{channel_id}", response_model=list[MessageView])
async def recent_messages(
    channel_id: int,
    limit: int | None = Query(None, ge=1, le=500),
    identity: Identity = Depends(get_current_identity),
    ledger: MessageLedger = Depends(get_message_ledger),
):
    messages = await ledger.recent(
        ChannelId(channel_id), limit or get_settings().recent_messages_limit,
    )
    return [MessageView.model_validate(m) for m in messages]


@router.get(
    "/channel/{channel_id}/paginated", response_model=MessagePageView,
)
async def paginated_messages(
    channel_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=100),
    identity: Identity = Depends(get_current_identity),
    ledger: MessageLedger = Depends(get_message_ledger),
):
    result = await ledger.page(ChannelId(channel_id), page, size)
    return MessagePageView(
        items=[MessageView.model_validate(m) for m in result.items],
        page=result.page,
        size=result.size,
        total_items=result.total_items,
        total_pages=result.total_pages,
        has_next=result.has_next,
    )


@router.post(
    "", response_model=MessageView, status_code=status.HTTP_201_CREATED,
)
async def post_message(
    body: MessageCreate,
    identity: Identity = Depends(get_current_identity),
    ledger: MessageLedger = Depends(get_message_ledger),
):
    message = await ledger.post(body.content, identity, ChannelId(body.channel_id))
    return MessageView.model_validate(message)


@router.put("/{message_id}", response_model=MessageView)
async def edit_message(
    message_id: int,
    body: MessageUpdate,
    identity: Identity = Depends(get_current_identity),
    ledger: MessageLedger = Depends(get_message_ledger),
):
    message = await ledger.edit(MessageId(message_id), body.content, identity)
    return MessageView.model_validate(message)


@router.delete("/{message_id}", response_model=StatusMessage)
async def delete_message(
    message_id: int,
    identity: Identity = Depends(get_current_identity),
    ledger: MessageLedger = Depends(get_message_ledger),
):
    await ledger.delete(MessageId(message_id), identity)
    return StatusMessage(message="Message deleted successfully")

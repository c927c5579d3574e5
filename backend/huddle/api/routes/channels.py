"""Channel Routes — create, join, leave, list.

Invariants:
    - Every route requires an authenticated Identity
    - Duplicate name -> 409, unknown channel -> 404
    - join/leave return the channel with its current member set
"""

from fastapi import APIRouter, Depends, status

from huddle.api.dependencies import get_channel_registry, get_current_identity
from huddle.core.domain_types import ChannelId, Identity
from huddle.schemas.channel import ChannelCreate, ChannelView
from huddle.services.channel_registry import ChannelRegistry

router = APIRouter(prefix="/api/v1/channels", tags=["channels"])


@router.get("", response_model=list[ChannelView])
async def list_public_channels(
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    return [ChannelView.model_validate(c) for c in await registry.list_public()]


@router.get("/mine", response_model=list[ChannelView])
async def list_my_channels(
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channels = await registry.list_for_member(identity)
    return [ChannelView.model_validate(c) for c in channels]


@router.get("/{channel_id}", response_model=ChannelView)
async def get_channel(
    channel_id: int,
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channel = await registry.require(ChannelId(channel_id))
    return ChannelView.model_validate(channel)


@router.post(
    "", response_model=ChannelView, status_code=status.HTTP_201_CREATED,
)
async def create_channel(
    body: ChannelCreate,
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channel = await registry.create(
        body.name, body.description, identity, is_private=body.is_private,
    )
    return ChannelView.model_validate(channel)


@router.post("/{channel_id}/join", response_model=ChannelView)
async def join_channel(
    channel_id: int,
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channel = await registry.join(ChannelId(channel_id), identity)
    return ChannelView.model_validate(channel)


@router.post("/{channel_id}/leave", response_model=ChannelView)
async def leave_channel(
    channel_id: int,
    identity: Identity = Depends(get_current_identity),
    registry: ChannelRegistry = Depends(get_channel_registry),
):
    channel = await registry.leave(ChannelId(channel_id), identity)
    return ChannelView.model_validate(channel)

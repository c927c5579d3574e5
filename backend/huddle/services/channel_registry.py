"""Channel Registry — channel creation, name uniqueness, and membership.

Invariants:
    - Channel names are unique by exact, case-sensitive match
    - The creator is a member the moment create() returns
    - join/leave use set semantics: repeating either is a no-op, not an error
    - Creating, joining and leaving are open to any authenticated identity

Design Decisions:
    - Name check before insert gives the common-case error cheaply; the unique
      constraint still decides concurrent creates
    - Every mutation re-reads the channel so callers see the committed member set
"""

import logging
from datetime import datetime
from typing import Callable, Sequence

from huddle.core.domain_types import Action, ChannelId, Identity, utc_now
from huddle.core.enforce_access import require_access
from huddle.core.errors import ChannelNameTakenError, ChannelNotFoundError
from huddle.core.repository_protocols import ChannelRecord, ChannelRepository

logger = logging.getLogger(__name__)


class ChannelRegistry:
    """Channel lifecycle and membership operations."""

    def __init__(
        self,
        channels: ChannelRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.channels = channels
        self.clock = clock

    async def create(
        self, name: str, description: str | None, creator: Identity,
        is_private: bool = False,
    ) -> ChannelRecord:
        if await self.channels.exists_by_name(name):
            raise ChannelNameTakenError(name)
        channel = await self.channels.create(
            name=name,
            description=description,
            is_private=is_private,
            creator_id=creator.user_id,
            now=self.clock(),
        )
        if channel is None:
            raise ChannelNameTakenError(name)
        logger.info(
            f"Channel created: {name}",
            extra={"channel_id": channel.id, "user_id": creator.user_id},
        )
        return channel

    async def join(self, channel_id: ChannelId, user: Identity) -> ChannelRecord:
        channel = await self.require(channel_id)
        require_access(user, channel, Action.JOIN)
        if await self.channels.add_member(channel_id, user.user_id):
            logger.info(
                "Member joined",
                extra={"channel_id": channel_id, "user_id": user.user_id},
            )
        return await self.require(channel_id)

    async def leave(self, channel_id: ChannelId, user: Identity) -> ChannelRecord:
        channel = await self.require(channel_id)
        require_access(user, channel, Action.LEAVE)
        if await self.channels.remove_member(channel_id, user.user_id):
            logger.info(
                "Member left",
                extra={"channel_id": channel_id, "user_id": user.user_id},
            )
        return await self.require(channel_id)

    async def list_public(self) -> Sequence[ChannelRecord]:
        return await self.channels.list_public()

    async def list_for_member(self, user: Identity) -> Sequence[ChannelRecord]:
        return await self.channels.list_for_member(user.user_id)

    async def get_by_id(self, channel_id: ChannelId) -> ChannelRecord | None:
        return await self.channels.find_by_id(channel_id)

    async def get_by_name(self, name: str) -> ChannelRecord | None:
        return await self.channels.find_by_name(name)

    async def require(self, channel_id: ChannelId) -> ChannelRecord:
        channel = await self.channels.find_by_id(channel_id)
        if channel is None:
            raise ChannelNotFoundError(channel_id)
        return channel

"""Message Ledger — post, edit, delete and read channel messages.

Invariants:
    - post() requires author ∈ channel members at the instant of posting;
      membership is not re-checked for messages that already exist
    - edit()/delete() require actor == sender; sender, channel and created_at
      never change
    - updated_at strictly increases on every edit
    - An edit racing a delete either lands before it or reports MessageNotFound
    - Reads are newest first with id as the tie-break (core/message_timeline.py)

Design Decisions:
    - Authorization decided by core.enforce_access before any write
    - NotFound (404) and NotOwner (403) kept distinct
"""

import logging
from datetime import datetime
from typing import Callable, Sequence

from huddle.core.domain_types import (
    Action, ChannelId, DEFAULT_RECENT_LIMIT, Identity, MessageId, MessageType,
    utc_now,
)
from huddle.core.enforce_access import can_act
from huddle.core.errors import (
    ChannelNotFoundError, MessageNotFoundError, NotAMemberError, NotOwnerError,
)
from huddle.core.message_timeline import MessagePage, next_updated_at, page_offset
from huddle.core.repository_protocols import (
    ChannelRepository, MessageRecord, MessageRepository,
)

logger = logging.getLogger(__name__)


class MessageLedger:
    """Message lifecycle with membership and ownership checks."""

    def __init__(
        self,
        messages: MessageRepository,
        channels: ChannelRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.messages = messages
        self.channels = channels
        self.clock = clock

    async def post(
        self, content: str, author: Identity, channel_id: ChannelId,
    ) -> MessageRecord:
        channel = await self.channels.find_by_id(channel_id)
        if channel is None:
            raise ChannelNotFoundError(channel_id)
        if not can_act(author, channel, Action.POST):
            logger.warning(
                "Post rejected: not a member",
                extra={"channel_id": channel_id, "user_id": author.user_id},
            )
            raise NotAMemberError(channel_id)

        message = await self.messages.create(
            content=content,
            sender_id=author.user_id,
            channel_id=channel_id,
            message_type=MessageType.TEXT,
            now=self.clock(),
        )
        logger.info(
            "Message posted",
            extra={
                "message_id": message.id, "channel_id": channel_id,
                "user_id": author.user_id,
            },
        )
        return message

    async def edit(
        self, message_id: MessageId, new_content: str, actor: Identity,
    ) -> MessageRecord:
        message = await self._require_owned(message_id, actor, Action.EDIT)
        updated_at = next_updated_at(message.updated_at, self.clock())
        if not await self.messages.update_content(
            message_id, new_content, updated_at,
        ):
            raise MessageNotFoundError(message_id)

        edited = await self.messages.find_by_id(message_id)
        if edited is None:
            raise MessageNotFoundError(message_id)
        logger.info(
            "Message edited",
            extra={"message_id": message_id, "user_id": actor.user_id},
        )
        return edited

    async def delete(self, message_id: MessageId, actor: Identity) -> None:
        await self._require_owned(message_id, actor, Action.DELETE)
        if not await self.messages.delete_by_id(message_id):
            raise MessageNotFoundError(message_id)
        logger.info(
            "Message deleted",
            extra={"message_id": message_id, "user_id": actor.user_id},
        )

    async def get(self, message_id: MessageId) -> MessageRecord:
        message = await self.messages.find_by_id(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return message

    async def recent(
        self, channel_id: ChannelId, limit: int = DEFAULT_RECENT_LIMIT,
    ) -> Sequence[MessageRecord]:
        return await self.messages.recent_by_channel(channel_id, limit)

    async def page(
        self, channel_id: ChannelId, page_index: int, page_size: int,
    ) -> MessagePage:
        if await self.channels.find_by_id(channel_id) is None:
            raise ChannelNotFoundError(channel_id)
        items = await self.messages.page_by_channel(
            channel_id, page_offset(page_index, page_size), page_size,
        )
        total = await self.messages.count_by_channel(channel_id)
        return MessagePage(
            items=list(items), page=page_index, size=page_size,
            total_items=total,
        )

    async def _require_owned(
        self, message_id: MessageId, actor: Identity, action: Action,
    ) -> MessageRecord:
        message = await self.get(message_id)
        if not can_act(actor, message, action):
            logger.warning(
                f"{action.value} rejected: not the sender",
                extra={"message_id": message_id, "user_id": actor.user_id},
            )
            raise NotOwnerError(message_id)
        return message

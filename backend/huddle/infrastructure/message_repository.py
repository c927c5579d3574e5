"""Message Repository — SQLAlchemy message store.

Invariants:
    - Implements core.repository_protocols.MessageRepository
    - Timelines ordered created_at DESC, id DESC (see core/message_timeline.py)
    - update_content/delete_by_id return False when no row matched, so a write
      racing a delete is reported instead of silently succeeding

Design Decisions:
    - Content edits issued as a single UPDATE ... WHERE id = :id: the store's
      row atomicity decides edit-vs-delete races
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.core.domain_types import ChannelId, MessageId, MessageType, UserId
from huddle.models.message import Message

NEWEST_FIRST = (Message.created_at.desc(), Message.id.desc())


class SqlMessageRepository:
    """Messages table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, message_id: MessageId) -> Message | None:
        result = await self.db.execute(
            select(Message).where(Message.id == message_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def create(
        self, content: str, sender_id: UserId, channel_id: ChannelId,
        message_type: MessageType, now: datetime,
    ) -> Message:
        message = Message(
            content=content,
            sender_id=sender_id,
            channel_id=channel_id,
            message_type=message_type.value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(message)
        await self.db.commit()
        return await self.find_by_id(MessageId(message.id))

    async def update_content(
        self, message_id: MessageId, content: str, updated_at: datetime,
    ) -> bool:
        result = await self.db.execute(
            update(Message)
            .where(Message.id == message_id)
            .values(content=content, updated_at=updated_at)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def delete_by_id(self, message_id: MessageId) -> bool:
        result = await self.db.execute(
            delete(Message)
            .where(Message.id == message_id)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def recent_by_channel(
        self, channel_id: ChannelId, limit: int,
    ) -> Sequence[Message]:
        return await self.page_by_channel(channel_id, 0, limit)

    async def page_by_channel(
        self, channel_id: ChannelId, offset: int, limit: int,
    ) -> Sequence[Message]:
        result = await self.db.execute(
            select(Message)
            .where(Message.channel_id == channel_id)
            .order_by(*NEWEST_FIRST)
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def count_by_channel(self, channel_id: ChannelId) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Message)
            .where(Message.channel_id == channel_id),
        )
        return result.scalar_one()

"""Channel Repository — SQLAlchemy channel store and membership relation.

Invariants:
    - Implements core.repository_protocols.ChannelRepository
    - create() inserts the channel and the creator's membership in one commit
    - add_member/remove_member are idempotent; they report whether the set changed
    - Lists are in id (insertion) order

Design Decisions:
    - Membership written through the channel_members table directly: a join is
      one INSERT, a duplicate concurrent join is absorbed by the composite key
    - populate_existing on reads: member set reflects the latest commit
"""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.core.domain_types import ChannelId, UserId
from huddle.models.channel import Channel, channel_members

logger = logging.getLogger(__name__)


class SqlChannelRepository:
    """Channels and channel_members table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _one(self, *criteria) -> Channel | None:
        result = await self.db.execute(
            select(Channel).where(*criteria)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, channel_id: ChannelId) -> Channel | None:
        return await self._one(Channel.id == channel_id)

    async def find_by_name(self, name: str) -> Channel | None:
        return await self._one(Channel.name == name)

    async def exists_by_name(self, name: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Channel)
            .where(Channel.name == name),
        )
        return result.scalar_one() > 0

    async def create(
        self, name: str, description: str | None, is_private: bool,
        creator_id: UserId, now: datetime,
    ) -> Channel | None:
        channel = Channel(
            name=name,
            description=description,
            is_private=is_private,
            created_by_id=creator_id,
            created_at=now,
        )
        self.db.add(channel)
        try:
            await self.db.flush()
            await self.db.execute(
                insert(channel_members).values(
                    channel_id=channel.id, user_id=creator_id,
                ),
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                f"Channel insert rejected by unique constraint: {name}",
            )
            return None
        return await self.find_by_id(ChannelId(channel.id))

    async def is_member(self, channel_id: ChannelId, user_id: UserId) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(channel_members).where(
                channel_members.c.channel_id == channel_id,
                channel_members.c.user_id == user_id,
            ),
        )
        return result.scalar_one() > 0

    async def add_member(self, channel_id: ChannelId, user_id: UserId) -> bool:
        if await self.is_member(channel_id, user_id):
            return False
        try:
            await self.db.execute(
                insert(channel_members).values(
                    channel_id=channel_id, user_id=user_id,
                ),
            )
            await self.db.commit()
        except IntegrityError:
            # concurrent join committed first
            await self.db.rollback()
            return False
        return True

    async def remove_member(
        self, channel_id: ChannelId, user_id: UserId,
    ) -> bool:
        result = await self.db.execute(
            delete(channel_members).where(
                channel_members.c.channel_id == channel_id,
                channel_members.c.user_id == user_id,
            ),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def list_public(self) -> Sequence[Channel]:
        result = await self.db.execute(
            select(Channel)
            .where(Channel.is_private.is_(False))
            .order_by(Channel.id)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

    async def list_for_member(self, user_id: UserId) -> Sequence[Channel]:
        result = await self.db.execute(
            select(Channel)
            .join(channel_members, channel_members.c.channel_id == Channel.id)
            .where(channel_members.c.user_id == user_id)
            .order_by(Channel.id)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all()

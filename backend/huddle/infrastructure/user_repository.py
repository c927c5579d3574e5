"""User Repository — SQLAlchemy credential store.

Invariants:
    - Implements core.repository_protocols.UserRepository
    - Every write commits immediately (no transaction spans a whole request)
    - create() returns None when the username/email unique constraint fires

Design Decisions:
    - populate_existing on reads: a request that wrote a row and reads it back
      sees the stored values, not stale identity-map state
"""

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.core.domain_types import UserId
from huddle.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """Users table access."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _one(self, *criteria) -> User | None:
        result = await self.db.execute(
            select(User).where(*criteria)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: UserId) -> User | None:
        return await self._one(User.id == user_id)

    async def find_by_username(self, username: str) -> User | None:
        return await self._one(User.username == username)

    async def find_by_email(self, email: str) -> User | None:
        return await self._one(User.email == email)

    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(User)
            .where(User.username == username),
        )
        return result.scalar_one() > 0

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(User)
            .where(User.email == email),
        )
        return result.scalar_one() > 0

    async def create(
        self, username: str, email: str, credential: str,
        display_name: str, now: datetime,
    ) -> User | None:
        user = User(
            username=username,
            email=email,
            credential=credential,
            display_name=display_name,
            online=False,
            created_at=now,
            last_active=now,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "User insert rejected by unique constraint",
                extra={"username": username},
            )
            return None
        return user

    async def set_online(
        self, user_id: UserId, online: bool, now: datetime,
    ) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(online=online, last_active=now),
        )
        await self.db.commit()

    async def update_profile(
        self, user_id: UserId, display_name: str | None, bio: str | None,
    ) -> User | None:
        values = {}
        if display_name is not None:
            values["display_name"] = display_name
        if bio is not None:
            values["bio"] = bio
        if values:
            await self.db.execute(
                update(User).where(User.id == user_id).values(**values),
            )
            await self.db.commit()
        return await self.find_by_id(user_id)

    async def list_all(self) -> Sequence[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return result.scalars().all()

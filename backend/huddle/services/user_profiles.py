"""User Profiles — read and edit the caller's own profile, list users.

Invariants:
    - update() only ever touches the row of the identity passed in
    - None fields are left unchanged
"""

import logging
from typing import Sequence

from huddle.core.domain_types import Identity
from huddle.core.errors import UserNotFoundError
from huddle.core.repository_protocols import UserRecord, UserRepository

logger = logging.getLogger(__name__)


class UserProfiles:

    def __init__(self, users: UserRepository):
        self.users = users

    async def get(self, identity: Identity) -> UserRecord:
        user = await self.users.find_by_id(identity.user_id)
        if user is None:
            raise UserNotFoundError(identity.user_id)
        return user

    async def list_all(self) -> Sequence[UserRecord]:
        return await self.users.list_all()

    async def update(
        self, identity: Identity,
        display_name: str | None = None, bio: str | None = None,
    ) -> UserRecord:
        user = await self.users.update_profile(
            identity.user_id, display_name, bio,
        )
        if user is None:
            raise UserNotFoundError(identity.user_id)
        logger.info("Profile updated", extra={"user_id": identity.user_id})
        return user

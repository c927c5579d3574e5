"""Authenticator — sign-in, sign-out, registration, and bearer-token resolution.

Invariants:
    - Unknown username and wrong password raise the same InvalidCredentialsError,
      after the same amount of hashing work
    - register() checks username before email: username conflict wins when both clash
    - online = True on sign-in, False on sign-out; sign-out is idempotent
    - Returned users are records; the API layer redacts the credential

Design Decisions:
    - Store, hasher, token service and clock injected: no framework globals
    - A unique-constraint race on insert is re-checked to report the precise conflict
"""

import logging
from datetime import datetime
from typing import Callable

from huddle.core.domain_types import Identity, utc_now
from huddle.core.errors import (
    EmailTakenError, InvalidCredentialsError, InvalidTokenError,
    UsernameTakenError,
)
from huddle.core.repository_protocols import UserRecord, UserRepository
from huddle.infrastructure.password_hasher import PasswordHasher
from huddle.services.token_service import TokenService

logger = logging.getLogger(__name__)


class Authenticator:
    """Credential checks on top of the user store."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.users = users
        self.tokens = tokens
        self.hasher = hasher
        self.clock = clock

    async def sign_in(
        self, username: str, password: str,
    ) -> tuple[str, UserRecord]:
        """Verify the password and issue a token. Marks the user online."""
        user = await self.users.find_by_username(username)
        if user is None:
            self.hasher.dummy_verify()
            logger.warning("Sign-in failed", extra={"username": username})
            raise InvalidCredentialsError()
        identity = Identity.from_record(user)
        if not self.hasher.verify(password, identity.credential):
            logger.warning("Sign-in failed", extra={"username": username})
            raise InvalidCredentialsError()

        token = self.tokens.issue(identity.username)
        await self.users.set_online(identity.user_id, True, self.clock())
        logger.info(
            "User signed in",
            extra={"user_id": identity.user_id, "username": identity.username},
        )
        return token, await self.users.find_by_id(identity.user_id)

    async def sign_out(self, identity: Identity) -> None:
        await self.users.set_online(identity.user_id, False, self.clock())
        logger.info(
            "User signed out",
            extra={"user_id": identity.user_id, "username": identity.username},
        )

    async def register(
        self, username: str, email: str, password: str,
    ) -> UserRecord:
        await self._ensure_available(username, email)
        user = await self.users.create(
            username=username,
            email=email,
            credential=self.hasher.hash(password),
            display_name=username,
            now=self.clock(),
        )
        if user is None:
            # lost a race on a unique column between the check and the insert
            await self._ensure_available(username, email)
            raise UsernameTakenError(username)
        logger.info(
            "User registered",
            extra={"user_id": user.id, "username": user.username},
        )
        return user

    async def resolve(self, token: str) -> Identity:
        """Bearer token -> Identity. Unknown users are invalid tokens."""
        username = self.tokens.validate(token)
        user = await self.users.find_by_username(username)
        if user is None:
            raise InvalidTokenError()
        return Identity.from_record(user)

    async def _ensure_available(self, username: str, email: str) -> None:
        if await self.users.exists_by_username(username):
            raise UsernameTakenError(username)
        if await self.users.exists_by_email(email):
            raise EmailTakenError(email)


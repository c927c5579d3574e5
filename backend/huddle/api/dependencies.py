"""API Dependencies — per-request wiring of stores, services and the caller's Identity.

Invariants:
    - One AsyncSession per request, shared by every repository in that request
    - Missing bearer token -> AuthenticationRequiredError; bad token -> InvalidTokenError,
      both before any route logic runs
    - TokenService and PasswordHasher are process-wide (stateless)

Design Decisions:
    - HTTPBearer(auto_error=False): the domain error hierarchy produces the 401
      envelope instead of FastAPI's default 403
    - lru_cache on stateless collaborators: built once from settings
"""

from functools import lru_cache
from datetime import timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.config import get_settings
from huddle.core.domain_types import Identity
from huddle.core.errors import AuthenticationRequiredError
from huddle.infrastructure.channel_repository import SqlChannelRepository
from huddle.infrastructure.database import get_db
from huddle.infrastructure.message_repository import SqlMessageRepository
from huddle.infrastructure.password_hasher import PasswordHasher
from huddle.infrastructure.user_repository import SqlUserRepository
from huddle.services.authenticator import Authenticator
from huddle.services.channel_registry import ChannelRegistry
from huddle.services.message_ledger import MessageLedger
from huddle.services.token_service import TokenService
from huddle.services.user_profiles import UserProfiles

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_authenticator(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> Authenticator:
    return Authenticator(SqlUserRepository(db), tokens, hasher)


def get_user_profiles(db: AsyncSession = Depends(get_db)) -> UserProfiles:
    return UserProfiles(SqlUserRepository(db))


def get_channel_registry(db: AsyncSession = Depends(get_db)) -> ChannelRegistry:
    return ChannelRegistry(SqlChannelRepository(db))


def get_message_ledger(db: AsyncSession = Depends(get_db)) -> MessageLedger:
    return MessageLedger(SqlMessageRepository(db), SqlChannelRepository(db))


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: Authenticator = Depends(get_authenticator),
) -> Identity:
    """Resolve the bearer token to the acting Identity."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError()
    return await auth.resolve(credentials.credentials)

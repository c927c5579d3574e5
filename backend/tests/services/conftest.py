"""Service test fixtures — repositories and services over the test DB.

Invariants:
    - All services in one test share the same AsyncSession and FakeClock
    - Passwords hashed with 4 bcrypt rounds
"""

from datetime import timedelta

import pytest

from huddle.core.domain_types import Identity
from huddle.infrastructure.channel_repository import SqlChannelRepository
from huddle.infrastructure.message_repository import SqlMessageRepository
from huddle.infrastructure.password_hasher import PasswordHasher
from huddle.infrastructure.user_repository import SqlUserRepository
from huddle.services.authenticator import Authenticator
from huddle.services.channel_registry import ChannelRegistry
from huddle.services.message_ledger import MessageLedger
from huddle.services.token_service import TokenService
from huddle.services.user_profiles import UserProfiles

TEST_KEY = "service-test-key-0123456789abcdef0123456789"


@pytest.fixture
def users(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def channels(test_db):
    return SqlChannelRepository(test_db)


@pytest.fixture
def messages(test_db):
    return SqlMessageRepository(test_db)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens(clock):
    return TokenService(TEST_KEY, ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def authenticator(users, tokens, hasher, clock):
    return Authenticator(users, tokens, hasher, clock=clock)


@pytest.fixture
def profiles(users):
    return UserProfiles(users)


@pytest.fixture
def registry(channels, clock):
    return ChannelRegistry(channels, clock=clock)


@pytest.fixture
def ledger(messages, channels, clock):
    return MessageLedger(messages, channels, clock=clock)


@pytest.fixture
def make_identity(authenticator):
    """Register a user and return its Identity."""
    async def _make(username: str) -> Identity:
        user = await authenticator.register(
            username, f"{username}@example.com", "secret-pw",
        )
        return Identity.from_record(user)
    return _make

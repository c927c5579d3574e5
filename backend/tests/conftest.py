"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment defaults set before any huddle module reads settings
    - Every test gets a fresh in-memory SQLite database
    - bcrypt runs at its minimum cost so hashing stays fast

Design Decisions:
    - SQLite in-memory with StaticPool: one connection, so every session in a
      test sees the same database (PostgreSQL-specific features not exercised)
"""

import os
from datetime import datetime, timedelta, timezone

# Ensure tests never pick up real secrets or a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "JWT_SECRET_KEY", "test-signing-key-0123456789abcdef0123456789",
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import huddle.models  # noqa: E402,F401
from huddle.db.base import Base  # noqa: E402


class FakeClock:
    """Controllable clock: returns a fixed instant until advanced."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session

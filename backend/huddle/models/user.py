"""User ORM — persists registered identities and their presence flag.

Invariants:
    - username (≤50) and email (≤100) are unique
    - credential is the one-way hash of the password; never serialized outward
    - online toggled only by sign-in / sign-out

Design Decisions:
    - Integer autoincrement id: monotonically increasing, doubles as insertion order
    - No channels/messages collections: membership is queried from channel_members
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from huddle.db.base import Base
from huddle.db.column_types import UTCDateTime


class User(Base):
    """User entity — root of identity."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    credential: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(String(500), nullable=True)
    online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_active: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

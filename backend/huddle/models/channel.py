"""Channel ORM — persists topic channels and their member set.

Invariants:
    - name (≤100) is unique, exact match
    - created_by_id set once at creation, never reassigned
    - channel_members has a composite primary key: a user is a member at most once

Design Decisions:
    - members loaded with selectin: every channel read carries its member set,
      which is what the authorization gate consults
    - member_ids exposed as a frozenset so callers cannot mutate membership
      outside the repository
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, ForeignKey, Index, Integer, String, Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from huddle.db.base import Base
from huddle.db.column_types import UTCDateTime

channel_members = Table(
    "channel_members",
    Base.metadata,
    Column(
        "channel_id", Integer,
        ForeignKey("channels.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "user_id", Integer,
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Index("ix_channel_members_user_id", "user_id"),
)


class Channel(Base):
    """Channel entity — a named room with a member set."""
    __tablename__ = "channels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_private: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_by_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    creator: Mapped["User"] = relationship("User", lazy="selectin")
    members: Mapped[list["User"]] = relationship(
        "User", secondary=channel_members, lazy="selectin",
        order_by="User.id",
    )

    @property
    def member_ids(self) -> frozenset[int]:
        return frozenset(member.id for member in self.members)

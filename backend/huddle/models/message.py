"""Message ORM — persists channel messages.

Invariants:
    - sender_id and channel_id are immutable after insert
    - content is 1–2000 chars (validated at the API boundary)
    - updated_at >= created_at, strictly increasing across edits

Design Decisions:
    - Composite index (channel_id, created_at, id) serves both recent() and page()
      with the id tie-break
    - message_type stored as its string value
"""

from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from huddle.core.domain_types import MessageType
from huddle.db.base import Base
from huddle.db.column_types import UTCDateTime


class Message(Base):
    """Message entity — authored by one user in one channel."""
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_channel_timeline", "channel_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    channel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("channels.id", ondelete="CASCADE"), nullable=False,
    )
    message_type: Mapped[str] = mapped_column(
        String(10), nullable=False, default=MessageType.TEXT.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    sender: Mapped["User"] = relationship("User", lazy="selectin")

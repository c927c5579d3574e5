"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ChannelId, MessageId wrap monotonically increasing ints
    - Identity is an immutable value; the credential never appears in repr
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Identity as a plain value passed explicitly down the call chain
      (no framework-managed "current user")
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ChannelId = NewType("ChannelId", int)
MessageId = NewType("MessageId", int)


# ─── Limits ──────────────────────────────────────────────────────

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
DISPLAY_NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
CHANNEL_NAME_MAX_LENGTH = 100
CHANNEL_DESCRIPTION_MAX_LENGTH = 500
MESSAGE_MAX_LENGTH = 2000
PASSWORD_MAX_BYTES = 72  # bcrypt input limit, UTF-8 encoded
DEFAULT_RECENT_LIMIT = 50


# ─── Enums ───────────────────────────────────────────────────────

class MessageType(str, Enum):
    """Message kinds — maps to DB `message_type` column."""
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    FILE = "FILE"
    SYSTEM = "SYSTEM"


class Action(str, Enum):
    """Actions an authenticated actor can attempt on a resource."""
    READ = "read"
    CREATE_CHANNEL = "create_channel"
    JOIN = "join"
    LEAVE = "leave"
    POST = "post"
    EDIT = "edit"
    DELETE = "delete"


# ─── Values ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Resolved actor for one request."""
    user_id: UserId
    username: str
    credential: str = field(default="", repr=False, compare=False)
    roles: frozenset[str] = frozenset()

    @classmethod
    def from_record(cls, record) -> "Identity":
        return cls(
            user_id=UserId(record.id),
            username=record.username,
            credential=record.credential,
        )


def utc_now() -> datetime:
    """Default clock for services — timezone-aware UTC."""
    return datetime.now(timezone.utc)

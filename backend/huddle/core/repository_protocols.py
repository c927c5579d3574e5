"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - create() returns None when a unique constraint rejected the row
      (a concurrent writer won); callers re-check to report the precise conflict

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these records are never async themselves
    - Records typed structurally so services never touch the ORM directly
"""

from datetime import datetime
from typing import Protocol, Sequence

from huddle.core.domain_types import ChannelId, MessageId, MessageType, UserId


class UserRecord(Protocol):
    """Structural contract for persisted users."""
    id: int
    username: str
    email: str
    credential: str
    display_name: str | None
    bio: str | None
    created_at: datetime
    last_active: datetime
    online: bool


class ChannelRecord(Protocol):
    """Structural contract for persisted channels."""
    id: int
    name: str
    description: str | None
    is_private: bool
    created_at: datetime
    created_by_id: int

    @property
    def member_ids(self) -> frozenset[int]: ...


class MessageRecord(Protocol):
    """Structural contract for persisted messages."""
    id: int
    content: str
    sender_id: int
    channel_id: int
    created_at: datetime
    updated_at: datetime
    message_type: str


class UserRepository(Protocol):
    """Credential store — implemented by shell."""
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def find_by_username(self, username: str) -> UserRecord | None: ...
    async def find_by_email(self, email: str) -> UserRecord | None: ...
    async def exists_by_username(self, username: str) -> bool: ...
    async def exists_by_email(self, email: str) -> bool: ...
    async def create(
        self, username: str, email: str, credential: str,
        display_name: str, now: datetime,
    ) -> UserRecord | None: ...
    async def set_online(
        self, user_id: UserId, online: bool, now: datetime,
    ) -> None: ...
    async def update_profile(
        self, user_id: UserId, display_name: str | None, bio: str | None,
    ) -> UserRecord | None: ...
    async def list_all(self) -> Sequence[UserRecord]: ...


class ChannelRepository(Protocol):
    """Channel store — implemented by shell."""
    async def find_by_id(self, channel_id: ChannelId) -> ChannelRecord | None: ...
    async def find_by_name(self, name: str) -> ChannelRecord | None: ...
    async def exists_by_name(self, name: str) -> bool: ...
    async def create(
        self, name: str, description: str | None, is_private: bool,
        creator_id: UserId, now: datetime,
    ) -> ChannelRecord | None: ...
    async def add_member(self, channel_id: ChannelId, user_id: UserId) -> bool: ...
    async def remove_member(
        self, channel_id: ChannelId, user_id: UserId,
    ) -> bool: ...
    async def list_public(self) -> Sequence[ChannelRecord]: ...
    async def list_for_member(self, user_id: UserId) -> Sequence[ChannelRecord]: ...


class MessageRepository(Protocol):
    """Message store — implemented by shell."""
    async def find_by_id(self, message_id: MessageId) -> MessageRecord | None: ...
    async def create(
        self, content: str, sender_id: UserId, channel_id: ChannelId,
        message_type: MessageType, now: datetime,
    ) -> MessageRecord: ...
    async def update_content(
        self, message_id: MessageId, content: str, updated_at: datetime,
    ) -> bool: ...
    async def delete_by_id(self, message_id: MessageId) -> bool: ...
    async def recent_by_channel(
        self, channel_id: ChannelId, limit: int,
    ) -> Sequence[MessageRecord]: ...
    async def page_by_channel(
        self, channel_id: ChannelId, offset: int, limit: int,
    ) -> Sequence[MessageRecord]: ...
    async def count_by_channel(self, channel_id: ChannelId) -> int: ...

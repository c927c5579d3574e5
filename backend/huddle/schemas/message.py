"""Message Schemas — post/edit payloads, message views, pages.

Invariants:
    - content: 1–2000 chars and not blank (kept as written, not stripped)
    - MessagePageView mirrors core.message_timeline.MessagePage
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from huddle.core.domain_types import MESSAGE_MAX_LENGTH, MessageType
from huddle.schemas.user import UserSummary


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("content cannot be empty or whitespace")
    return v


class MessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)
    channel_id: int = Field(ge=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class MessageUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class MessageView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    channel_id: int
    sender: UserSummary
    message_type: MessageType
    created_at: datetime
    updated_at: datetime


class MessagePageView(BaseModel):
    items: list[MessageView]
    page: int
    size: int
    total_items: int
    total_pages: int
    has_next: bool

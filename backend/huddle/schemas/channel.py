"""Channel Schemas — channel creation and views.

Invariants:
    - ChannelCreate.name: 1–100 chars, stripped, non-empty
    - ChannelView lists members as summaries in id order
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from huddle.core.domain_types import (
    CHANNEL_DESCRIPTION_MAX_LENGTH, CHANNEL_NAME_MAX_LENGTH,
)
from huddle.schemas.user import UserSummary


class ChannelCreate(BaseModel):
    name: str = Field(min_length=1, max_length=CHANNEL_NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=CHANNEL_DESCRIPTION_MAX_LENGTH)
    is_private: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ChannelView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    is_private: bool
    created_at: datetime
    created_by: UserSummary = Field(validation_alias="creator")
    members: list[UserSummary]

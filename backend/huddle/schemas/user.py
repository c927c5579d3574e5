"""User Schemas — redacted user views and profile updates.

Invariants:
    - UserView never includes the credential
    - ProfileUpdate: display_name ≤100, bio ≤500, omitted fields unchanged
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from huddle.core.domain_types import BIO_MAX_LENGTH, DISPLAY_NAME_MAX_LENGTH


class UserSummary(BaseModel):
    """Compact user reference embedded in channels and messages."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    display_name: str | None = None


class UserView(BaseModel):
    """Public profile of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    display_name: str | None = None
    bio: str | None = None
    online: bool = False
    created_at: datetime
    last_active: datetime


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(None, max_length=DISPLAY_NAME_MAX_LENGTH)
    bio: str | None = Field(None, max_length=BIO_MAX_LENGTH)

    @field_validator("display_name")
    @classmethod
    def strip_display_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("display_name cannot be empty or whitespace")
        return v

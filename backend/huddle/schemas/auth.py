"""Auth Schemas — sign-in, sign-up and token response.

Invariants:
    - username ≤50 and stripped the same way on sign-up and sign-in
    - email valid and ≤100
    - password non-empty and at most 72 UTF-8 bytes (the bcrypt input limit),
      so no two distinct passwords share a hash
    - TokenResponse carries the redacted UserView, never the credential

Design Decisions:
    - EmailStr (email-validator) for email shape; length bound kept separately
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from huddle.core.domain_types import (
    EMAIL_MAX_LENGTH, PASSWORD_MAX_BYTES, USERNAME_MAX_LENGTH,
)
from huddle.schemas.user import UserView


def _strip_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("username cannot be empty or whitespace")
    return v


def _bound_password(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(
            f"password must be at most {PASSWORD_MAX_BYTES} bytes",
        )
    return v


class SignInRequest(BaseModel):
    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _strip_username(v)

    @field_validator("password")
    @classmethod
    def bound_password(cls, v: str) -> str:
        return _bound_password(v)


class SignUpRequest(BaseModel):
    """Registration — username stripped, email normalized by EmailStr."""
    username: str = Field(min_length=3, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _strip_username(v)

    @field_validator("email")
    @classmethod
    def bound_email(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return v

    @field_validator("password")
    @classmethod
    def bound_password(cls, v: str) -> str:
        return _bound_password(v)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserView


class StatusMessage(BaseModel):
    message: str

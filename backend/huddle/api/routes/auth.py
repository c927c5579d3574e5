"""Auth Routes — sign-in, sign-up, sign-out.

Invariants:
    - Sign-in failures are one generic 401 (no username enumeration)
    - Sign-up conflicts are 409 with USERNAME_TAKEN checked before EMAIL_TAKEN
    - Sign-out requires a valid token and is idempotent
"""

from fastapi import APIRouter, Depends, status

from huddle.api.dependencies import get_authenticator, get_current_identity
from huddle.core.domain_types import Identity
from huddle.schemas.auth import (
    SignInRequest, SignUpRequest, StatusMessage, TokenResponse,
)
from huddle.schemas.user import UserView
from huddle.services.authenticator import Authenticator

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signin", response_model=TokenResponse)
async def sign_in(
    body: SignInRequest, auth: Authenticator = Depends(get_authenticator),
):
    token, user = await auth.sign_in(body.username, body.password)
    return TokenResponse(
        access_token=token,
        expires_in=int(auth.tokens.ttl.total_seconds()),
        user=UserView.model_validate(user),
    )


@router.post(
    "/signup", response_model=UserView, status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    body: SignUpRequest, auth: Authenticator = Depends(get_authenticator),
):
    user = await auth.register(body.username, body.email, body.password)
    return UserView.model_validate(user)


@router.post("/signout", response_model=StatusMessage)
async def sign_out(
    identity: Identity = Depends(get_current_identity),
    auth: Authenticator = Depends(get_authenticator),
):
    await auth.sign_out(identity)
    return StatusMessage(message="User signed out successfully")

"""User Routes — caller profile read/update and user listing.

Invariants:
    - PUT /me only ever edits the caller's own profile
    - Responses never include the credential
"""

from fastapi import APIRouter, Depends

from huddle.api.dependencies import get_current_identity, get_user_profiles
from huddle.core.domain_types import Identity
from huddle.schemas.user import ProfileUpdate, UserView
from huddle.services.user_profiles import UserProfiles

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserView)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    profiles: UserProfiles = Depends(get_user_profiles),
):
    return UserView.model_validate(await profiles.get(identity))


@router.put("/me", response_model=UserView)
async def update_me(
    body: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    profiles: UserProfiles = Depends(get_user_profiles),
):
    user = await profiles.update(identity, body.display_name, body.bio)
    return UserView.model_validate(user)


@router.get("", response_model=list[UserView])
async def list_users(
    identity: Identity = Depends(get_current_identity),
    profiles: UserProfiles = Depends(get_user_profiles),
):
    return [UserView.model_validate(u) for u in await profiles.list_all()]

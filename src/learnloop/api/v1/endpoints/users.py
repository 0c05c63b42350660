"""Profile endpoints."""

import uuid

from fastapi import APIRouter

from learnloop.api.v1.dependencies import CurrentUserDep, SessionDep
from learnloop.core.errors import NotFound
from learnloop.schemas.user import ProfileResponse, ProfileUpdate, PublicUser
from learnloop.services import accounts

router = APIRouter(tags=["users"])


@router.get("/me", response_model=ProfileResponse)
async def get_profile(user: CurrentUserDep) -> ProfileResponse:
    return ProfileResponse.model_validate(user)


@router.put("/me", response_model=ProfileResponse)
async def update_profile(payload: ProfileUpdate, user: CurrentUserDep, db: SessionDep) -> ProfileResponse:
    """Change the caller's username and/or bio."""
    updated = accounts.update_profile(db, user, payload)
    return ProfileResponse.model_validate(updated)


@router.get("/users/{user_id}", response_model=PublicUser)
async def get_public_user(user_id: uuid.UUID, db: SessionDep) -> PublicUser:
    user = accounts.get_user(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return PublicUser.model_validate(user)

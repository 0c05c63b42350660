"""Bookmark endpoints."""

from fastapi import APIRouter, status

from learnloop.api.v1.dependencies import CurrentUserDep, SessionDep
from learnloop.schemas.common import MessageResponse
from learnloop.schemas.saved_post import SavedPostListResponse, SavedPostResponse
from learnloop.services import saved_posts as saved_service
from learnloop.services.posts import to_post_response

router = APIRouter(prefix="/saved-posts", tags=["saved-posts"])


@router.get("", response_model=SavedPostListResponse)
async def list_saved_posts(db: SessionDep, user: CurrentUserDep) -> SavedPostListResponse:
    items = saved_service.list_saved_posts(db, user)
    return SavedPostListResponse(posts=[to_post_response(item) for item in items])


@router.post("/{post_id}", response_model=SavedPostResponse, status_code=status.HTTP_201_CREATED)
async def save_post(post_id: int, db: SessionDep, user: CurrentUserDep) -> SavedPostResponse:
    return SavedPostResponse.model_validate(saved_service.save_post(db, user, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
async def unsave_post(post_id: int, db: SessionDep, user: CurrentUserDep) -> MessageResponse:
    saved_service.unsave_post(db, user, post_id)
    return MessageResponse(message="Post removed from saved")

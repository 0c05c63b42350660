"""Comment endpoints."""

from fastapi import APIRouter, status

from learnloop.api.v1.dependencies import CurrentUserDep, SessionDep, VerifiedUserDep, ViewerDep
from learnloop.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from learnloop.schemas.common import MessageResponse
from learnloop.services import comments as comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    db: SessionDep,
    user: VerifiedUserDep,
) -> CommentResponse:
    comment = comment_service.create_comment(db, user, payload)
    return CommentResponse.model_validate(comment)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, db: SessionDep, viewer: ViewerDep) -> CommentResponse:
    return CommentResponse.model_validate(comment_service.get_visible_comment(db, viewer, comment_id))


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    db: SessionDep,
    user: CurrentUserDep,
) -> CommentResponse:
    return CommentResponse.model_validate(
        comment_service.update_comment(db, user, comment_id, payload)
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(comment_id: int, db: SessionDep, user: CurrentUserDep) -> MessageResponse:
    comment_service.delete_comment(db, user, comment_id)
    return MessageResponse(message="Comment deleted successfully")

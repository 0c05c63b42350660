# src/learnloop/api/v1/endpoints/posts.py
"""Post-related endpoints for the LearnLoop API."""

from fastapi import APIRouter, Query, status

from learnloop.api.v1.dependencies import CurrentUserDep, SessionDep, VerifiedUserDep, ViewerDep
from learnloop.schemas.comment import CommentListResponse, CommentResponse
from learnloop.schemas.common import CountedPagination, MessageResponse
from learnloop.schemas.post import PostCreate, PostResponse, PostUpdate
from learnloop.services import comments as comment_service
from learnloop.services import posts as post_service
from learnloop.services.visibility import Viewer

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, db: SessionDep, user: VerifiedUserDep) -> PostResponse:
    """Publish a post under an existing topic."""
    post = post_service.create_post(db, user, payload)
    viewer = Viewer.for_user(user)
    return post_service.render_post(db, viewer, post_service.get_visible_post(db, viewer, post.id))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep, viewer: ViewerDep) -> PostResponse:
    """Get a post; hidden posts resolve only for their author and admins."""
    post = post_service.get_visible_post(db, viewer, post_id)
    return post_service.render_post(db, viewer, post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    db: SessionDep,
    user: CurrentUserDep,
) -> PostResponse:
    post_service.update_post(db, user, post_id, payload)
    viewer = Viewer.for_user(user)
    return post_service.render_post(db, viewer, post_service.get_visible_post(db, viewer, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: int, db: SessionDep, user: CurrentUserDep) -> MessageResponse:
    post_service.delete_post(db, user, post_id)
    return MessageResponse(message="Post deleted successfully")


@router.get("/{post_id}/comments", response_model=CommentListResponse)
async def list_post_comments(
    post_id: int,
    db: SessionDep,
    viewer: ViewerDep,
    limit: int | None = Query(None, description="Maximum number of comments (max 100)"),
    offset: int | None = Query(None, description="Number of comments to skip"),
) -> CommentListResponse:
    """List a post's comments oldest first."""
    page = comment_service.list_comments(db, viewer, post_id, limit=limit, offset=offset)
    return CommentListResponse(
        comments=[CommentResponse.model_validate(comment) for comment in page.comments],
        pagination=CountedPagination(
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
        ),
    )

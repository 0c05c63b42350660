"""Post CRUD with visibility-aware reads."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from learnloop.core.errors import Forbidden, InvalidRequest, NotFound
from learnloop.db.time import utcnow
from learnloop.models import Post, User
from learnloop.schemas.post import PostCreate, PostResponse, PostUpdate
from learnloop.schemas.topic import TopicSummary
from learnloop.schemas.user import UserSummary
from learnloop.services.feed import FeedItem, FeedService
from learnloop.services.topics import get_topic
from learnloop.services.visibility import Viewer, visibility_clause

logger = logging.getLogger(__name__)


def get_visible_post(db: Session, viewer: Viewer, post_id: int) -> Post:
    """Return the post if *viewer* may see it.

    Raises:
        NotFound: If the post is missing, deleted or hidden from *viewer*.
    """
    post = db.scalar(
        select(Post)
        .options(selectinload(Post.author), selectinload(Post.primary_topic))
        .where(Post.id == post_id, visibility_clause(Post, viewer))
    )
    if post is None:
        raise NotFound("Post not found")
    return post


def _get_own_post(db: Session, user: User, post_id: int) -> Post:
    post = db.scalar(select(Post).where(Post.id == post_id, Post.deleted_at.is_(None)))
    if post is None:
        raise NotFound("Post not found")
    if post.author_id != user.id:
        raise Forbidden("You can only modify your own posts")
    return post


def create_post(db: Session, author: User, data: PostCreate) -> Post:
    """Persist a new post under an existing topic."""
    get_topic(db, data.primary_topic_id)
    post = Post(
        title=data.title.strip(),
        content=data.content.strip(),
        author_id=author.id,
        primary_topic_id=data.primary_topic_id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", author.id, post.id)
    return post


def update_post(db: Session, user: User, post_id: int, data: PostUpdate) -> Post:
    """Apply a partial update to the caller's own post."""
    post = _get_own_post(db, user, post_id)
    update_dict = data.model_dump(exclude_unset=True, exclude_none=True)
    if not update_dict:
        raise InvalidRequest("No fields to update")
    if "primary_topic_id" in update_dict:
        get_topic(db, update_dict["primary_topic_id"])

    for key, value in update_dict.items():
        setattr(post, key, value.strip() if isinstance(value, str) else value)
    post.updated_at = utcnow()
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, user: User, post_id: int) -> None:
    """Soft-delete the caller's own post; it disappears from every listing."""
    post = _get_own_post(db, user, post_id)
    post.deleted_at = utcnow()
    db.commit()
    logger.info("User %s deleted post %s", user.id, post_id)


def to_post_response(item: FeedItem) -> PostResponse:
    """Convert an enriched post to its API schema."""
    post = item.post
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        author_id=post.author_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
        author=UserSummary.model_validate(post.author),
        primary_topic=TopicSummary.model_validate(post.primary_topic),
        vote_count=item.vote_count,
        comment_count=item.comment_count,
        has_voted=item.has_voted,
        is_saved=item.is_saved,
        user_vote_id=item.user_vote_id,
        is_hidden=post.is_hidden,
    )


def render_post(db: Session, viewer: Viewer, post: Post) -> PostResponse:
    """Enrich a single post for *viewer* and convert it."""
    return to_post_response(FeedService.enrich(db, viewer, [post])[0])

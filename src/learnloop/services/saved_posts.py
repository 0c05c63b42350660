"""Bookmarks."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from learnloop.core.errors import Conflict, NotFound
from learnloop.models import Post, SavedPost, User
from learnloop.services.feed import FeedItem, FeedService
from learnloop.services.posts import get_visible_post
from learnloop.services.visibility import Viewer, visibility_clause


def save_post(db: Session, user: User, post_id: int) -> SavedPost:
    get_visible_post(db, Viewer.for_user(user), post_id)
    if db.get(SavedPost, (user.id, post_id)) is not None:
        raise Conflict("Post already saved")

    saved = SavedPost(user_id=user.id, post_id=post_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise Conflict("Post already saved") from err
    db.refresh(saved)
    return saved


def unsave_post(db: Session, user: User, post_id: int) -> None:
    saved = db.get(SavedPost, (user.id, post_id))
    if saved is None:
        raise NotFound("Saved post not found")
    db.delete(saved)
    db.commit()


def list_saved_posts(db: Session, user: User) -> list[FeedItem]:
    """Return the user's bookmarks that are still visible to them, newest save first."""
    viewer = Viewer.for_user(user)
    posts = list(
        db.scalars(
            select(Post)
            .join(SavedPost, SavedPost.post_id == Post.id)
            .options(selectinload(Post.author), selectinload(Post.primary_topic))
            .where(SavedPost.user_id == user.id, visibility_clause(Post, viewer))
            .order_by(SavedPost.saved_at.desc(), Post.id.desc())
        )
    )
    return FeedService.enrich(db, viewer, posts)

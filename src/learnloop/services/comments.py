"""Comment CRUD; listings apply the full visibility predicate per row."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from learnloop.core.errors import Forbidden, NotFound
from learnloop.db.time import utcnow
from learnloop.models import Comment, User
from learnloop.schemas.comment import CommentCreate, CommentUpdate
from learnloop.services.posts import get_visible_post
from learnloop.services.visibility import Viewer, visibility_clause

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


@dataclass
class CommentPage:
    comments: list[Comment]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


def create_comment(db: Session, author: User, data: CommentCreate) -> Comment:
    """Attach a comment to a post the author can see."""
    post = get_visible_post(db, Viewer.for_user(author), data.post_id)
    comment = Comment(content=data.content, author_id=author.id, post_id=post.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented %s on post %s", author.id, comment.id, post.id)
    return comment


def list_comments(
    db: Session,
    viewer: Viewer,
    post_id: int,
    *,
    limit: int | None = None,
    offset: int | None = None,
) -> CommentPage:
    """Return the post's visible comments, oldest first."""
    # A missing or non-positive limit means the default page; offsets clamp at zero.
    if limit is None or limit < 1:
        limit = DEFAULT_PAGE_SIZE
    limit = min(limit, MAX_PAGE_SIZE)
    offset = max(offset or 0, 0)

    get_visible_post(db, viewer, post_id)
    clauses = [Comment.post_id == post_id, visibility_clause(Comment, viewer)]
    total = int(db.scalar(select(func.count()).select_from(Comment).where(*clauses)) or 0)
    comments = list(
        db.scalars(
            select(Comment)
            .options(selectinload(Comment.author))
            .where(*clauses)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .offset(offset)
            .limit(limit)
        )
    )
    return CommentPage(comments=comments, total=total, limit=limit, offset=offset)


def get_visible_comment(db: Session, viewer: Viewer, comment_id: int) -> Comment:
    comment = db.scalar(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.id == comment_id, visibility_clause(Comment, viewer))
    )
    if comment is None:
        raise NotFound("Comment not found")
    return comment


def _get_own_comment(db: Session, user: User, comment_id: int) -> Comment:
    comment = db.scalar(
        select(Comment).where(Comment.id == comment_id, Comment.deleted_at.is_(None))
    )
    if comment is None:
        raise NotFound("Comment not found")
    if comment.author_id != user.id:
        raise Forbidden("You can only modify your own comments")
    return comment


def update_comment(db: Session, user: User, comment_id: int, data: CommentUpdate) -> Comment:
    comment = _get_own_comment(db, user, comment_id)
    comment.content = data.content
    comment.updated_at = utcnow()
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, user: User, comment_id: int) -> None:
    """Soft-delete the caller's own comment."""
    comment = _get_own_comment(db, user, comment_id)
    comment.deleted_at = utcnow()
    db.commit()
    logger.info("User %s deleted comment %s", user.id, comment_id)

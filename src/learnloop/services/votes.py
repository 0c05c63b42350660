"""Upvotes on posts and comments, feeding the author's learning score."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnloop.core.errors import Conflict, Forbidden, NotFound
from learnloop.models import Comment, Post, User, Vote, VoteType
from learnloop.services.visibility import Viewer, visibility_clause

logger = logging.getLogger(__name__)


def _adjust_score(db: Session, author_id: uuid.UUID, delta: int) -> None:
    query = update(User).where(User.id == author_id)
    if delta < 0:
        query = query.where(User.learning_score > 0)
    db.execute(query.values(learning_score=User.learning_score + delta))


def cast_vote(
    db: Session,
    user: User,
    *,
    post_id: int | None = None,
    comment_id: int | None = None,
) -> Vote:
    """Upvote a visible post or comment written by someone else.

    Raises:
        NotFound: Target missing or not visible to *user*.
        Forbidden: *user* wrote the target.
        Conflict: *user* already upvoted the target.
    """
    model: type[Post] | type[Comment] = Post if post_id is not None else Comment
    target_id = post_id if post_id is not None else comment_id
    kind = "post" if model is Post else "comment"

    target = db.scalar(
        select(model).where(model.id == target_id, visibility_clause(model, Viewer.for_user(user)))
    )
    if target is None:
        raise NotFound(f"{kind.capitalize()} not found")
    if target.author_id == user.id:
        raise Forbidden("You cannot vote on your own content")

    column = Vote.post_id if model is Post else Vote.comment_id
    if db.scalar(select(Vote.id).where(Vote.user_id == user.id, column == target_id)) is not None:
        raise Conflict(f"You have already voted on this {kind}")

    vote = Vote(user_id=user.id, post_id=post_id, comment_id=comment_id, type=VoteType.UPVOTE)
    db.add(vote)
    try:
        db.flush()
        _adjust_score(db, target.author_id, 1)
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise Conflict(f"You have already voted on this {kind}") from err
    db.refresh(vote)
    return vote


def remove_vote(db: Session, user: User, vote_id: int) -> None:
    """Withdraw the caller's vote and take the point back from the author."""
    vote = db.get(Vote, vote_id)
    if vote is None:
        raise NotFound("Vote not found")
    if vote.user_id != user.id:
        raise Forbidden("You can only remove your own votes")

    target: Post | Comment | None
    if vote.post_id is not None:
        target = db.get(Post, vote.post_id)
    else:
        target = db.get(Comment, vote.comment_id)

    db.delete(vote)
    if target is not None:
        _adjust_score(db, target.author_id, -1)
    db.commit()

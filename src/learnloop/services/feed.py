# src/learnloop/services/feed.py
"""Read-only discovery feeds.

Ordering is deliberately transparent: newest first, then most upvoted, then
highest id. There is no personalization or ranking model.
"""

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session, selectinload

from learnloop.core.errors import InvalidRequest, NotFound
from learnloop.core.settings import settings
from learnloop.models import Comment, Post, SavedPost, Topic, User, Vote
from learnloop.services.visibility import (
    Viewer,
    author_feed_visibility_clause,
    feed_visibility_clause,
    visibility_clause,
)


@dataclass
class FeedItem:
    """A post together with counts and the viewer's own interactions."""

    post: Post
    vote_count: int = 0
    comment_count: int = 0
    has_voted: bool = False
    is_saved: bool = False
    user_vote_id: int | None = None


@dataclass
class FeedPage:
    items: list[FeedItem]
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return len(self.items) == self.limit


def normalize_pagination(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Apply feed defaults and caps.

    A limit of 0 means the default page size.

    Raises:
        InvalidRequest: If limit or offset is negative.
    """
    limit = limit or settings.feed_default_limit
    offset = offset or 0
    if limit < 0 or offset < 0:
        raise InvalidRequest("Invalid pagination parameters")
    return min(limit, settings.feed_max_limit), offset


class FeedService:
    """Builds home, topic and author feeds under the visibility policy."""

    def home(self, db: Session, viewer: Viewer, *, limit: int, offset: int) -> FeedPage:
        return self._page(db, viewer, [feed_visibility_clause(Post, viewer)], limit, offset)

    def topic(
        self,
        db: Session,
        viewer: Viewer,
        topic_id: int,
        *,
        limit: int,
        offset: int,
    ) -> tuple[Topic, FeedPage]:
        topic = db.get(Topic, topic_id)
        if topic is None:
            raise NotFound("Topic not found")
        clauses = [Post.primary_topic_id == topic_id, feed_visibility_clause(Post, viewer)]
        return topic, self._page(db, viewer, clauses, limit, offset)

    def author(
        self,
        db: Session,
        viewer: Viewer,
        author_id: uuid.UUID,
        *,
        limit: int,
        offset: int,
    ) -> tuple[User, FeedPage]:
        author = db.get(User, author_id)
        if author is None:
            raise NotFound("Author not found")
        clauses = [
            Post.author_id == author_id,
            author_feed_visibility_clause(Post, viewer, author_id),
        ]
        return author, self._page(db, viewer, clauses, limit, offset)

    def _page(
        self,
        db: Session,
        viewer: Viewer,
        clauses: list[ColumnElement[bool]],
        limit: int,
        offset: int,
    ) -> FeedPage:
        posts = list(
            db.scalars(
                select(Post)
                .options(selectinload(Post.author), selectinload(Post.primary_topic))
                .where(*clauses)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .offset(offset)
                .limit(limit)
            )
        )
        items = self.enrich(db, viewer, posts)
        # Votes only break ties between posts on the same page. Stable sort keeps
        # id-descending order among equal keys.
        items.sort(key=lambda item: (item.post.created_at, item.vote_count), reverse=True)
        return FeedPage(items=items, limit=limit, offset=offset)

    @staticmethod
    def enrich(db: Session, viewer: Viewer, posts: list[Post]) -> list[FeedItem]:
        """Attach vote/comment counts and the viewer's vote and bookmark state."""
        if not posts:
            return []
        post_ids = [post.id for post in posts]

        vote_counts = _counts_by(db, Vote.post_id, post_ids)
        comment_counts = _counts_by(
            db, Comment.post_id, post_ids, visibility_clause(Comment, viewer)
        )

        my_votes: dict[int, int] = {}
        saved: set[int] = set()
        if viewer.user_id is not None:
            my_votes = {
                post_id: vote_id
                for vote_id, post_id in db.execute(
                    select(Vote.id, Vote.post_id).where(
                        Vote.user_id == viewer.user_id, Vote.post_id.in_(post_ids)
                    )
                )
            }
            saved = set(
                db.scalars(
                    select(SavedPost.post_id).where(
                        SavedPost.user_id == viewer.user_id, SavedPost.post_id.in_(post_ids)
                    )
                )
            )

        return [
            FeedItem(
                post=post,
                vote_count=vote_counts.get(post.id, 0),
                comment_count=comment_counts.get(post.id, 0),
                has_voted=post.id in my_votes,
                is_saved=post.id in saved,
                user_vote_id=my_votes.get(post.id),
            )
            for post in posts
        ]


def _counts_by(
    db: Session,
    column: Any,
    ids: list[int],
    *extra: ColumnElement[bool],
) -> dict[int, int]:
    rows = db.execute(
        select(column, func.count()).where(column.in_(ids), *extra).group_by(column)
    ).all()
    return {int(key): int(count) for key, count in rows}

"""Post and feed schemas."""

import uuid
from datetime import datetime

from pydantic import Field

from .common import APIModel, Pagination
from .topic import TopicSummary
from .user import PublicUser, UserSummary


class PostCreate(APIModel):
    title: str = Field(..., min_length=1, max_length=60)
    content: str = Field(..., min_length=1)
    primary_topic_id: int


class PostUpdate(APIModel):
    title: str | None = Field(None, min_length=1, max_length=60)
    content: str | None = Field(None, min_length=1)
    primary_topic_id: int | None = None


class PostResponse(APIModel):
    """A post enriched with counts and the viewer's interactions."""

    id: int
    title: str
    content: str
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime | None = None
    author: UserSummary
    primary_topic: TopicSummary
    vote_count: int = 0
    comment_count: int = 0
    has_voted: bool = False
    is_saved: bool = False
    user_vote_id: int | None = None
    is_hidden: bool = False


class FeedResponse(APIModel):
    posts: list[PostResponse]
    pagination: Pagination


class TopicFeedResponse(FeedResponse):
    topic: TopicSummary


class AuthorFeedResponse(FeedResponse):
    author: PublicUser

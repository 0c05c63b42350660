# src/learnloop/api/v1/endpoints/feed.py
"""Read-only discovery feeds.

Anonymous requests are allowed. Admins see hidden posts in every feed; an
author additionally sees their own hidden posts in their author feed.
"""

import uuid

from fastapi import APIRouter, Query

from learnloop.api.v1.dependencies import FeedServiceDep, SessionDep, ViewerDep
from learnloop.schemas.common import Pagination
from learnloop.schemas.post import AuthorFeedResponse, FeedResponse, TopicFeedResponse
from learnloop.schemas.topic import TopicSummary
from learnloop.schemas.user import PublicUser
from learnloop.services.feed import FeedPage, normalize_pagination
from learnloop.services.posts import to_post_response

router = APIRouter(prefix="/feed", tags=["feed"])


def _pagination(page: FeedPage) -> Pagination:
    return Pagination(limit=page.limit, offset=page.offset, has_more=page.has_more)


@router.get("/home", response_model=FeedResponse)
async def home_feed(
    db: SessionDep,
    viewer: ViewerDep,
    feeds: FeedServiceDep,
    limit: int | None = Query(None, description="Page size (default 20, max 100)"),
    offset: int | None = Query(None, description="Number of posts to skip"),
) -> FeedResponse:
    """Every visible post, newest first."""
    limit, offset = normalize_pagination(limit, offset)
    page = feeds.home(db, viewer, limit=limit, offset=offset)
    return FeedResponse(
        posts=[to_post_response(item) for item in page.items],
        pagination=_pagination(page),
    )


@router.get("/topic/{topic_id}", response_model=TopicFeedResponse)
async def topic_feed(
    topic_id: int,
    db: SessionDep,
    viewer: ViewerDep,
    feeds: FeedServiceDep,
    limit: int | None = Query(None, description="Page size (default 20, max 100)"),
    offset: int | None = Query(None, description="Number of posts to skip"),
) -> TopicFeedResponse:
    limit, offset = normalize_pagination(limit, offset)
    topic, page = feeds.topic(db, viewer, topic_id, limit=limit, offset=offset)
    return TopicFeedResponse(
        topic=TopicSummary.model_validate(topic),
        posts=[to_post_response(item) for item in page.items],
        pagination=_pagination(page),
    )


@router.get("/author/{author_id}", response_model=AuthorFeedResponse)
async def author_feed(
    author_id: uuid.UUID,
    db: SessionDep,
    viewer: ViewerDep,
    feeds: FeedServiceDep,
    limit: int | None = Query(None, description="Page size (default 20, max 100)"),
    offset: int | None = Query(None, description="Number of posts to skip"),
) -> AuthorFeedResponse:
    limit, offset = normalize_pagination(limit, offset)
    author, page = feeds.author(db, viewer, author_id, limit=limit, offset=offset)
    return AuthorFeedResponse(
        author=PublicUser.model_validate(author),
        posts=[to_post_response(item) for item in page.items],
        pagination=_pagination(page),
    )

"""Saved-post schemas."""

from datetime import datetime

from .common import APIModel
from .post import PostResponse


class SavedPostResponse(APIModel):
    post_id: int
    saved_at: datetime


class SavedPostListResponse(APIModel):
    posts: list[PostResponse]

"""Vote schemas."""

from datetime import datetime

from pydantic import model_validator

from learnloop.models import VoteType

from .common import APIModel


class VoteCreate(APIModel):
    """Upvote exactly one post or comment."""

    post_id: int | None = None
    comment_id: int | None = None

    @model_validator(mode="after")
    def _single_target(self) -> "VoteCreate":
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("Provide exactly one of postId or commentId")
        return self


class VoteResponse(APIModel):
    id: int
    post_id: int | None
    comment_id: int | None
    type: VoteType
    voted_at: datetime

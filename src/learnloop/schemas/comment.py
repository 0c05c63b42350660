"""Comment schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import APIModel, CountedPagination
from .user import UserSummary

MIN_COMMENT_LENGTH = 20


def _check_content(value: str) -> str:
    value = value.strip()
    if len(value) < MIN_COMMENT_LENGTH:
        raise ValueError(f"Comment must be at least {MIN_COMMENT_LENGTH} characters")
    return value


class CommentCreate(APIModel):
    content: str = Field(..., max_length=5000)
    post_id: int

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return _check_content(value)


class CommentUpdate(APIModel):
    content: str = Field(..., max_length=5000)

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return _check_content(value)


class CommentResponse(APIModel):
    id: int
    content: str
    post_id: int
    created_at: datetime
    updated_at: datetime | None = None
    is_hidden: bool = False
    author: UserSummary


class CommentListResponse(APIModel):
    comments: list[CommentResponse]
    pagination: CountedPagination

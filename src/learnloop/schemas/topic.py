"""Topic schemas."""

from datetime import datetime

from pydantic import Field

from .common import APIModel


class TopicCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=80)
    description: str = Field("", max_length=500)


class TopicSummary(APIModel):
    id: int
    name: str


class TopicResponse(TopicSummary):
    description: str
    created_at: datetime

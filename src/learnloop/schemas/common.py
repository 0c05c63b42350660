"""Shared Pydantic schemas for common API elements."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base model rendering camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(APIModel):
    """Offset pagination block; ``has_more`` is true when the page filled ``limit``."""

    limit: int
    offset: int
    has_more: bool


class CountedPagination(Pagination):
    total: int = Field(..., ge=0)


class MessageResponse(APIModel):
    message: str

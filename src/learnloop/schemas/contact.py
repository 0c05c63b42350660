"""Contact form schema."""

from pydantic import Field, field_validator

from .common import APIModel
from .user import normalize_email


class ContactRequest(APIModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=320)
    subject: str = Field(..., max_length=200)
    message: str = Field(..., max_length=5000)

    @field_validator("name", "subject", "message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field is required")
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return normalize_email(value)

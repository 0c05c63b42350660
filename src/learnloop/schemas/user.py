"""User and authentication schemas."""

import re
import uuid
from datetime import datetime

from pydantic import Field, field_validator

from .common import APIModel

USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,30}$"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """Lower-case and trim *value*, rejecting strings that are not addresses."""
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


class RegisterRequest(APIModel):
    email: str = Field(..., max_length=320)
    username: str = Field(..., pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return normalize_email(value)


class LoginRequest(APIModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        return value.strip().lower()


class ProfileUpdate(APIModel):
    """Partial profile update; at least one field must be supplied."""

    username: str | None = Field(None, pattern=USERNAME_PATTERN)
    bio: str | None = Field(None, max_length=160)


class UserSummary(APIModel):
    """Author projection embedded in posts, comments and reports."""

    id: uuid.UUID
    username: str
    learning_score: int


class PublicUser(UserSummary):
    created_at: datetime


class ProfileResponse(PublicUser):
    bio: str | None = None


class AccountResponse(ProfileResponse):
    """The authenticated user's own account, as returned by auth endpoints."""

    email: str
    email_verified: bool
    is_admin: bool


class RegisterResponse(APIModel):
    message: str
    user: AccountResponse


class TokenResponse(APIModel):
    access_token: str
    token_type: str = "bearer"
    user: AccountResponse

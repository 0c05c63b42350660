# src/learnloop/models/user.py
"""SQLAlchemy models for user accounts."""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnloop.db.session import Base
from learnloop.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post


class UserRole(str, enum.Enum):
    """Account classes; system accounts bypass per-user quotas."""

    USER = "USER"
    SYSTEM = "SYSTEM"
    BOT = "BOT"


class User(Base):
    """A registered learner."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    username: Mapped[str] = mapped_column(String(30), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(String(160), nullable=True)
    # Incremented whenever someone upvotes this user's content.
    learning_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
    )

    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verification_token: Mapped[str | None] = mapped_column(
        String(64),
        unique=True,
        nullable=True,
    )
    verification_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_system_account(self) -> bool:
        """Return True for the bootstrap SYSTEM and BOT accounts."""
        return self.role in (UserRole.SYSTEM, UserRole.BOT)

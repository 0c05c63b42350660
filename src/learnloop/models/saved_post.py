# src/learnloop/models/saved_post.py
"""Bookmark join table between users and posts."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from learnloop.db.session import Base
from learnloop.db.time import utcnow


class SavedPost(Base):
    """A post bookmarked by a user."""

    __tablename__ = "saved_posts"

    # Composite primary key prevents saving the same post twice.
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

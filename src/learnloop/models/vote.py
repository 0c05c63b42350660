# src/learnloop/models/vote.py
"""Models capturing voting interactions on posts and comments."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from learnloop.db.session import Base
from learnloop.db.time import utcnow


class VoteType(str, enum.Enum):
    """Only upvotes exist; there is no downvote."""

    UPVOTE = "UPVOTE"


class Vote(Base):
    """Per-user upvote on exactly one post or comment."""

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_votes_single_target",
        ),
        UniqueConstraint("user_id", "post_id", name="uq_votes_user_post"),
        UniqueConstraint("user_id", "comment_id", name="uq_votes_user_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    type: Mapped[VoteType] = mapped_column(
        Enum(VoteType, name="vote_type"),
        nullable=False,
        default=VoteType.UPVOTE,
    )
    voted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

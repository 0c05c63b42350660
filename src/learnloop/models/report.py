# src/learnloop/models/report.py
"""Community reports raised against posts and comments."""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnloop.db.session import Base
from learnloop.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post
    from .user import User


class ReportReason(str, enum.Enum):
    """Fixed set of reasons a reporter may choose from."""

    SPAM = "SPAM"
    INAPPROPRIATE = "INAPPROPRIATE"
    HARASSMENT = "HARASSMENT"
    MISINFORMATION = "MISINFORMATION"
    OFF_TOPIC = "OFF_TOPIC"
    OTHER = "OTHER"


class Report(Base):
    """One user's flag against one post or comment.

    Rows are never updated. They disappear only when an admin dismisses every
    report for the target, or when the reporter or target is deleted.
    """

    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_reports_single_target",
        ),
        UniqueConstraint("reporter_id", "post_id", name="uq_reports_reporter_post"),
        UniqueConstraint("reporter_id", "comment_id", name="uq_reports_reporter_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_id: Mapped[uuid.UUID] = mapped_column(
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
    reason: Mapped[ReportReason] = mapped_column(
        Enum(ReportReason, name="report_reason"),
        nullable=False,
    )
    details: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        index=True,
        nullable=False,
        default=utcnow,
    )

    reporter: Mapped["User"] = relationship("User")
    post: Mapped[Optional["Post"]] = relationship("Post")
    comment: Mapped[Optional["Comment"]] = relationship("Comment")

    @property
    def target_kind(self) -> str:
        """Return ``"post"`` or ``"comment"``."""
        return "post" if self.post_id is not None else "comment"

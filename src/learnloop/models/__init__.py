# src/learnloop/models/__init__.py
"""SQLAlchemy models for the LearnLoop application."""

from .comment import Comment
from .post import Post
from .report import Report, ReportReason
from .saved_post import SavedPost
from .topic import Topic
from .user import User, UserRole
from .vote import Vote, VoteType

__all__ = [
    "Comment",
    "Post",
    "Report", "ReportReason",
    "SavedPost",
    "Topic",
    "User", "UserRole",
    "Vote", "VoteType",
]

# src/learnloop/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .comments import router as comments_router
from .contact import router as contact_router
from .feed import router as feed_router
from .posts import router as posts_router
from .reports import router as reports_router
from .saved_posts import router as saved_posts_router
from .topics import router as topics_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "users_router",
    "topics_router",
    "posts_router",
    "comments_router",
    "votes_router",
    "saved_posts_router",
    "feed_router",
    "reports_router",
    "admin_router",
    "contact_router",
]

# src/learnloop/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    comments_router,
    contact_router,
    feed_router,
    posts_router,
    reports_router,
    saved_posts_router,
    topics_router,
    users_router,
    votes_router,
)

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

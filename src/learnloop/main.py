"""Main entry point for the LearnLoop application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import SQLAlchemyError

from learnloop import __version__
from learnloop.api.v1 import (
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
from learnloop.core.errors import register_exception_handlers
from learnloop.core.settings import settings
from learnloop.db.session import SessionLocal, create_tables
from learnloop.services.bootstrap import bootstrap_system_users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social learning platform API with community moderation",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(topics_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(votes_router, prefix="/api")
app.include_router(saved_posts_router, prefix="/api")
app.include_router(feed_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(contact_router, prefix="/api")


@app.on_event("startup")
async def on_startup() -> None:
    try:
        create_tables()
    except SQLAlchemyError:
        logger.exception("Could not create database tables")
        return
    bootstrap_system_users(SessionLocal)
    logger.info("%s %s started", settings.app_name, __version__)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Social learning platform API with community moderation",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("learnloop.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

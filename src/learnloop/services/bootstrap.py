"""Create the built-in SYSTEM and BOT accounts on startup."""
from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnloop.core.security import hash_password
from learnloop.core.settings import settings
from learnloop.models import User, UserRole

logger = logging.getLogger(__name__)

SYSTEM_USERNAME = "LearnLoop"
BOT_USERNAME = "LearnLoop Bot"


def ensure_system_user(
    db: Session,
    *,
    email: str | None,
    password: str | None,
    username: str,
    role: UserRole,
) -> User | None:
    """Create a verified system account unless it already exists.

    Returns the account, or ``None`` when its credentials are not configured.
    """
    if not email or not password:
        logger.warning("Credentials for %s account not set; skipping creation", role.value)
        return None

    email = email.strip().lower()
    existing = db.scalar(select(User).where(User.email == email))
    if existing is not None:
        logger.info("%s account already exists: %s", role.value, email)
        return existing

    user = User(
        email=email,
        username=username,
        hashed_password=hash_password(password),
        role=role,
        email_verified=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created %s account: %s", role.value, email)
    return user


def bootstrap_system_users(session_factory: Callable[[], Session]) -> None:
    """Idempotently create both built-in accounts.

    Database failures are logged and never propagate, so the API can still start.
    """
    db = session_factory()
    try:
        ensure_system_user(
            db,
            email=settings.system_user_email,
            password=settings.system_user_password,
            username=SYSTEM_USERNAME,
            role=UserRole.SYSTEM,
        )
        ensure_system_user(
            db,
            email=settings.bot_user_email,
            password=settings.bot_user_password,
            username=BOT_USERNAME,
            role=UserRole.BOT,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("System user bootstrap failed")
    finally:
        db.close()

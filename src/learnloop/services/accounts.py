"""Account lifecycle helpers: registration, login, email verification and profiles."""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnloop.core import security
from learnloop.core.errors import Conflict, InvalidRequest, Unauthenticated
from learnloop.models.user import User
from learnloop.schemas.user import ProfileUpdate, RegisterRequest
from learnloop.services.email import (
    EmailService,
    generate_verification_token,
    is_token_expired,
    send_verification_email,
    send_verification_success_email,
    token_expiration,
)

__all__ = [
    "get_user",
    "get_user_by_email",
    "register_user",
    "authenticate",
    "verify_email",
    "resend_verification",
    "update_profile",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: object) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(func.lower(User.email) == email.strip().lower()))


def _username_taken(db: Session, username: str, *, exclude: User | None = None) -> bool:
    query = select(User.id).where(func.lower(User.username) == username.lower())
    if exclude is not None:
        query = query.where(User.id != exclude.id)
    return db.scalar(query) is not None


def register_user(db: Session, data: RegisterRequest, mailer: EmailService) -> User:
    """Create an unverified account and send its verification email.

    Raises:
        Conflict: If the email or username is already registered.
    """
    if get_user_by_email(db, data.email) is not None:
        raise Conflict("Email already registered")
    if _username_taken(db, data.username):
        raise Conflict("Username already taken")

    token = generate_verification_token()
    user = User(
        email=data.email,
        username=data.username,
        hashed_password=security.hash_password(data.password),
        verification_token=token,
        verification_token_expires_at=token_expiration(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise Conflict("Email or username already registered") from err
    db.refresh(user)
    logger.info("Registered user %s", user.id)

    if not send_verification_email(mailer, user.email, user.username, token):
        logger.warning("Verification email for user %s was not delivered", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user owning *email* if *password* matches.

    Raises:
        Unauthenticated: On unknown email or wrong password.
    """
    user = get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.hashed_password):
        raise Unauthenticated("Invalid email or password")
    return user


def verify_email(db: Session, token: str, mailer: EmailService) -> User:
    """Mark the account holding *token* as verified.

    Raises:
        InvalidRequest: If the token is unknown or expired.
    """
    if not token:
        raise InvalidRequest("Verification token is required")
    user = db.scalar(select(User).where(User.verification_token == token))
    if user is None:
        raise InvalidRequest("Invalid or expired verification token")
    if is_token_expired(user.verification_token_expires_at):
        raise InvalidRequest("Invalid or expired verification token")

    user.email_verified = True
    user.verification_token = None
    user.verification_token_expires_at = None
    db.commit()
    db.refresh(user)
    logger.info("User %s verified their email", user.id)

    send_verification_success_email(mailer, user.email, user.username)
    return user


def resend_verification(db: Session, user: User, mailer: EmailService) -> User:
    """Issue a fresh verification token for *user*.

    Raises:
        InvalidRequest: If the email is already verified.
    """
    if user.email_verified:
        raise InvalidRequest("Email is already verified")

    token = generate_verification_token()
    user.verification_token = token
    user.verification_token_expires_at = token_expiration()
    db.commit()
    db.refresh(user)

    if not send_verification_email(mailer, user.email, user.username, token):
        logger.warning("Verification email for user %s was not delivered", user.id)
    return user


def update_profile(db: Session, user: User, update_data: ProfileUpdate) -> User:
    """Apply a partial username/bio update.

    Raises:
        InvalidRequest: If no field was supplied.
        Conflict: If the new username belongs to someone else.
    """
    update_dict = update_data.model_dump(exclude_unset=True)
    if not update_dict:
        raise InvalidRequest("No fields to update")

    username = update_dict.get("username")
    if username is not None and _username_taken(db, username, exclude=user):
        raise Conflict("Username already taken")
    if "bio" in update_dict and update_dict["bio"] is not None:
        update_dict["bio"] = update_dict["bio"].strip() or None

    for key, value in update_dict.items():
        if key == "username" and value is None:
            continue
        setattr(user, key, value)

    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise Conflict("Username already taken") from err
    db.refresh(user)
    return user

"""Password hashing and access-token helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import Any
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from learnloop.core.settings import settings
from learnloop.db.time import utcnow

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Return an argon2 hash for *password*."""
    return _hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Return True if *password* matches the stored hash."""
    try:
        return _hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user_id: UUID, expires_minutes: int | None = None) -> str:
    """Create a signed JWT whose subject is the user's UUID."""
    now = utcnow()
    ttl = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl)).timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by *token*.

    Raises:
        ValueError: If the token is malformed, expired or has no usable subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise ValueError("Could not validate credentials")
    try:
        return UUID(str(subject))
    except ValueError as err:
        raise ValueError("Could not validate credentials") from err

"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from learnloop.core.errors import Forbidden, Unauthenticated
from learnloop.core.security import decode_access_token
from learnloop.db.session import get_db
from learnloop.models import User
from learnloop.services.email import EmailService, get_email_service
from learnloop.services.feed import FeedService
from learnloop.services.rate_limit import RateLimiter, get_rate_limiter
from learnloop.services.reports import ReportLedger
from learnloop.services.visibility import Viewer

# Missing credentials are handled per dependency so optional auth can fall through.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _resolve_user(credentials: HTTPAuthorizationCredentials, db: Session) -> User:
    try:
        user_id = decode_access_token(credentials.credentials)
    except ValueError as err:
        raise Unauthenticated("Could not validate credentials") from err

    user = db.get(User, user_id)
    if user is None:
        raise Unauthenticated("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        Unauthenticated: If the token is missing, invalid or names no user.
    """
    if credentials is None:
        raise Unauthenticated("Authentication required")
    return _resolve_user(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Like :func:`get_current_user` but anonymous requests yield ``None``.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _resolve_user(credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_verified_user(user: CurrentUserDep) -> User:
    """Require a verified email address before content can be created."""
    if not user.email_verified:
        raise Forbidden("Please verify your email address first", code="email_not_verified")
    return user


def get_admin_user(user: CurrentUserDep) -> User:
    if not user.is_admin:
        raise Forbidden("Admin access required")
    return user


def get_viewer(user: OptionalUserDep) -> Viewer:
    """Return the visibility context of the request."""
    return Viewer.for_user(user)


def get_report_ledger() -> ReportLedger:
    return ReportLedger()


def get_feed_service() -> FeedService:
    return FeedService()


VerifiedUserDep = Annotated[User, Depends(get_verified_user)]
AdminUserDep = Annotated[User, Depends(get_admin_user)]
ViewerDep = Annotated[Viewer, Depends(get_viewer)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]
ReportLedgerDep = Annotated[ReportLedger, Depends(get_report_ledger)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]

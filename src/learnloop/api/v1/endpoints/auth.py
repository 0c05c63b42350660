# src/learnloop/api/v1/endpoints/auth.py
"""Authentication endpoints for the LearnLoop API."""

from fastapi import APIRouter, Query, status

from learnloop.api.v1.dependencies import CurrentUserDep, EmailServiceDep, SessionDep
from learnloop.core.security import create_access_token
from learnloop.schemas.common import MessageResponse
from learnloop.schemas.user import (
    AccountResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from learnloop.services import accounts

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: SessionDep, mailer: EmailServiceDep) -> RegisterResponse:
    """Create an account and email a verification link."""
    user = accounts.register_user(db, payload, mailer)
    return RegisterResponse(
        message="Registration successful. Please check your email to verify your account.",
        user=AccountResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = accounts.authenticate(db, payload.email, payload.password)
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=AccountResponse.model_validate(user),
    )


@router.get("/verify-email", response_model=MessageResponse)
async def verify_email(
    db: SessionDep,
    mailer: EmailServiceDep,
    token: str = Query("", description="Verification token from the email link"),
) -> MessageResponse:
    accounts.verify_email(db, token, mailer)
    return MessageResponse(message="Email verified successfully")


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    user: CurrentUserDep,
    db: SessionDep,
    mailer: EmailServiceDep,
) -> MessageResponse:
    accounts.resend_verification(db, user, mailer)
    return MessageResponse(message="Verification email sent")


@router.get("/me", response_model=AccountResponse)
async def current_account(user: CurrentUserDep) -> AccountResponse:
    """Return the authenticated account including its private fields."""
    return AccountResponse.model_validate(user)

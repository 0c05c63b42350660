# mypy: ignore-errors
# tests/v1/test_auth.py
"""Tests for registration, login and email verification."""

from datetime import timedelta

import pytest
from fastapi import status
from sqlalchemy import select

from learnloop.db.time import utcnow
from learnloop.models import User

REGISTER_URL = "/api/auth/register"


def _register(client, **overrides):
    payload = {"email": "Learner@Example.com", "username": "learner_1", "password": "s3cret-pass"}
    payload.update(overrides)
    return client.post(REGISTER_URL, json=payload)


def _stored_user(db_session, email="learner@example.com") -> User:
    db_session.expire_all()
    return db_session.scalar(select(User).where(User.email == email))


def test_register(client, db_session) -> None:
    response = _register(client)

    assert response.status_code == status.HTTP_201_CREATED
    user = response.json()["user"]
    assert user["email"] == "learner@example.com"
    assert user["username"] == "learner_1"
    assert user["emailVerified"] is False
    assert user["learningScore"] == 0
    assert "hashedPassword" not in user

    stored = _stored_user(db_session)
    assert stored.hashed_password != "s3cret-pass"
    assert len(stored.verification_token) == 64
    assert stored.verification_token_expires_at is not None


def test_register_sends_verification_email(client, caplog) -> None:
    with caplog.at_level("INFO", logger="learnloop.services.email"):
        _register(client)

    assert "Verify your LearnLoop account" in caplog.text
    assert "/verify-email?token=" in caplog.text


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"username": "ab"},
        {"username": "has space"},
        {"username": "x" * 31},
        {"password": "short"},
    ],
)
def test_register_validation(client, overrides) -> None:
    response = _register(client, **overrides)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "invalid_request"


def test_register_duplicate_email(client) -> None:
    _register(client)
    response = _register(client, username="someone_else")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Email already registered"


def test_register_duplicate_username(client) -> None:
    _register(client)
    response = _register(client, email="other@example.com", username="LEARNER_1")

    assert response.status_code == status.HTTP_409_CONFLICT


def test_login(client, author, test_password) -> None:
    response = client.post("/api/auth/login", json={"email": author.email, "password": test_password})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["user"]["id"] == str(author.id)

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert me.json()["email"] == author.email


@pytest.mark.parametrize(
    "credentials",
    [
        {"email": "author@example.com", "password": "wrong-password"},
        {"email": "nobody@example.com", "password": "correct-horse-battery"},
    ],
)
def test_login_rejects_bad_credentials(client, author, credentials) -> None:
    response = client.post("/api/auth/login", json=credentials)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_verify_email(client, db_session) -> None:
    _register(client)
    token = _stored_user(db_session).verification_token

    response = client.get("/api/auth/verify-email", params={"token": token})

    assert response.status_code == status.HTTP_200_OK
    stored = _stored_user(db_session)
    assert stored.email_verified is True
    assert stored.verification_token is None


def test_verify_email_rejects_unknown_token(client) -> None:
    response = client.get("/api/auth/verify-email", params={"token": "f" * 64})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_verify_email_requires_token(client) -> None:
    response = client.get("/api/auth/verify-email")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_verify_email_rejects_expired_token(client, db_session) -> None:
    _register(client)
    stored = _stored_user(db_session)
    stored.verification_token_expires_at = utcnow() - timedelta(minutes=1)
    db_session.commit()

    response = client.get("/api/auth/verify-email", params={"token": stored.verification_token})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert _stored_user(db_session).email_verified is False


def test_resend_verification(client, auth_headers, db_session, unverified_user) -> None:
    response = client.post("/api/auth/resend-verification", headers=auth_headers(unverified_user))

    assert response.status_code == status.HTTP_200_OK
    db_session.refresh(unverified_user)
    assert len(unverified_user.verification_token) == 64


def test_resend_verification_when_verified(client, auth_headers, author) -> None:
    response = client.post("/api/auth/resend-verification", headers=auth_headers(author))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Email is already verified"


def test_resend_verification_requires_auth(client) -> None:
    response = client.post("/api/auth/resend-verification")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED

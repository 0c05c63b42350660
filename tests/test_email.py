# mypy: ignore-errors
# tests/test_email.py
"""Tests for email delivery and verification-token helpers."""

import logging
import smtplib
from datetime import timedelta

from learnloop.core.settings import settings
from learnloop.db.time import utcnow
from learnloop.services.email import (
    EmailService,
    generate_verification_token,
    is_token_expired,
    token_expiration,
)


def test_verification_tokens_are_random_hex() -> None:
    first, second = generate_verification_token(), generate_verification_token()

    assert len(first) == 64
    int(first, 16)
    assert first != second


def test_token_expiration_uses_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "verification_token_hours", 2)

    expires = token_expiration()

    assert timedelta(minutes=119) < expires - utcnow() <= timedelta(hours=2)


def test_is_token_expired() -> None:
    assert is_token_expired(None) is True
    assert is_token_expired(utcnow() - timedelta(seconds=1)) is True
    assert is_token_expired(utcnow() + timedelta(hours=1)) is False
    naive_future = (utcnow() + timedelta(hours=1)).replace(tzinfo=None)
    assert is_token_expired(naive_future) is False


def test_send_without_smtp_logs_message(monkeypatch, caplog) -> None:
    monkeypatch.setattr(settings, "smtp_host", "")

    with caplog.at_level(logging.INFO, logger="learnloop.services.email"):
        delivered = EmailService().send("learner@example.com", "Hello", "Body text")

    assert delivered is True
    assert "learner@example.com" in caplog.text
    assert "Body text" in caplog.text


def test_send_reports_smtp_failure(monkeypatch) -> None:
    monkeypatch.setattr(settings, "smtp_host", "smtp.invalid")

    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(smtplib, "SMTP", refuse)

    assert EmailService().send("learner@example.com", "Hello", "Body text") is False

"""Outbound email and verification-token helpers.

Messages go out over SMTP when ``SMTP_HOST`` is configured. Otherwise they
are written to the log so development and tests need no mail server.
"""

from __future__ import annotations

import logging
import secrets
import smtplib
from datetime import datetime, timedelta
from email.message import EmailMessage
from html import escape
from urllib.parse import urlencode

from learnloop.core.settings import settings
from learnloop.db.time import utcnow

logger = logging.getLogger(__name__)

VERIFICATION_TOKEN_BYTES = 32
_SIGNATURE = "Best regards,\nThe LearnLoop Team"


def generate_verification_token() -> str:
    """Return a random 64-character hex token."""
    return secrets.token_hex(VERIFICATION_TOKEN_BYTES)


def token_expiration(hours: int | None = None) -> datetime:
    """Return the instant a token issued now stops being valid."""
    return utcnow() + timedelta(hours=hours if hours is not None else settings.verification_token_hours)


def is_token_expired(expires_at: datetime | None) -> bool:
    """Return True if *expires_at* is missing or in the past."""
    if expires_at is None:
        return True
    if expires_at.tzinfo is None:
        # SQLite hands back naive datetimes; they were stored as UTC.
        expires_at = expires_at.replace(tzinfo=utcnow().tzinfo)
    return utcnow() > expires_at


class EmailService:
    """Sends plain-text + HTML messages."""

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> bool:
        """Deliver a message and return True on success.

        Delivery problems are logged and reported through the return value.
        """
        message = EmailMessage()
        message["From"] = settings.email_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        if html:
            message.add_alternative(html, subtype="html")

        if not settings.smtp_configured:
            logger.info("SMTP not configured; email to %s not sent.\nSubject: %s\n\n%s", to, subject, text)
            return True

        try:
            with smtplib.SMTP(settings.smtp_host or "", settings.smtp_port, timeout=10) as smtp:
                if settings.smtp_use_tls:
                    smtp.starttls()
                if settings.smtp_user and settings.smtp_password:
                    smtp.login(settings.smtp_user, settings.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send email to %s", to)
            return False

        logger.info("Sent email %r to %s", subject, to)
        return True


def verification_url(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/verify-email?{urlencode({'token': token})}"


def send_verification_email(service: EmailService, email: str, username: str, token: str) -> bool:
    """Send the link a new user follows to verify their address."""
    url = verification_url(token)
    hours = settings.verification_token_hours
    text = (
        f"Hi {username},\n\n"
        "Thank you for registering with LearnLoop!\n\n"
        "Please verify your email address by opening the link below:\n"
        f"{url}\n\n"
        f"This link will expire in {hours} hours.\n\n"
        "If you did not create an account, please ignore this email.\n\n"
        f"{_SIGNATURE}"
    )
    html = (
        f"<p>Hi {escape(username)},</p>"
        "<p>Thank you for registering with LearnLoop!</p>"
        f'<p><a href="{escape(url)}">Verify Email Address</a></p>'
        f"<p>This link will expire in {hours} hours.</p>"
        "<p>If you did not create an account, please ignore this email.</p>"
    )
    return service.send(email, "Verify your LearnLoop account", text, html)


def send_verification_success_email(service: EmailService, email: str, username: str) -> bool:
    """Confirm to the user that their address is now verified."""
    text = (
        f"Hi {username},\n\n"
        "Your email address has been verified successfully!\n\n"
        "You can now create posts, comment and save your favorite content.\n\n"
        f"{_SIGNATURE}"
    )
    html = (
        f"<p>Hi {escape(username)},</p>"
        "<p>Your email address has been verified successfully!</p>"
        "<p>You can now create posts, comment and save your favorite content.</p>"
    )
    return service.send(email, "Email verified successfully", text, html)


def get_email_service() -> EmailService:
    """Return an email service instance."""
    return EmailService()

"""Public contact form; messages are emailed, never stored."""

import logging

from fastapi import APIRouter

from learnloop.api.v1.dependencies import EmailServiceDep
from learnloop.core.errors import AppError
from learnloop.core.settings import settings
from learnloop.schemas.common import MessageResponse
from learnloop.schemas.contact import ContactRequest

router = APIRouter(prefix="/contact", tags=["contact"])
logger = logging.getLogger(__name__)


@router.post("", response_model=MessageResponse)
async def submit_contact(payload: ContactRequest, mailer: EmailServiceDep) -> MessageResponse:
    if not settings.contact_email_to:
        logger.error("CONTACT_EMAIL_TO is not configured")
        raise AppError("Contact form is temporarily unavailable", code="contact_unavailable")

    text = (
        f"Name: {payload.name}\n"
        f"Email: {payload.email}\n"
        f"Subject: {payload.subject}\n\n"
        f"{payload.message}\n"
    )
    if not mailer.send(settings.contact_email_to, f"[LearnLoop Contact] {payload.subject}", text):
        raise AppError("Failed to send message. Please try again later.", code="contact_unavailable")
    return MessageResponse(message="Your message has been sent. We'll get back to you soon.")

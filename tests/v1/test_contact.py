# mypy: ignore-errors
# tests/v1/test_contact.py
"""Tests for the contact form."""

import pytest
from fastapi import status

from learnloop.core.settings import settings
from learnloop.services.email import EmailService

PAYLOAD = {
    "name": "Ada",
    "email": "ada@example.com",
    "subject": "Hello",
    "message": "I love this platform.",
}


@pytest.fixture()
def contact_inbox(monkeypatch):
    monkeypatch.setattr(settings, "contact_email_to", "team@learnloop.local")


def test_contact_sends_message(client, contact_inbox, monkeypatch) -> None:
    sent = []

    def fake_send(self, to, subject, text, html=None):
        sent.append((to, subject, text))
        return True

    monkeypatch.setattr(EmailService, "send", fake_send)

    response = client.post("/api/contact", json=PAYLOAD)

    assert response.status_code == status.HTTP_200_OK
    assert sent[0][0] == "team@learnloop.local"
    assert sent[0][1] == "[LearnLoop Contact] Hello"
    assert "ada@example.com" in sent[0][2]


@pytest.mark.parametrize("field", ["name", "subject", "message"])
def test_contact_rejects_blank_fields(client, contact_inbox, field) -> None:
    response = client.post("/api/contact", json={**PAYLOAD, field: "   "})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_contact_rejects_bad_email(client, contact_inbox) -> None:
    response = client.post("/api/contact", json={**PAYLOAD, "email": "nope"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_contact_unconfigured(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "contact_email_to", None)

    response = client.post("/api/contact", json=PAYLOAD)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"] == "contact_unavailable"


def test_contact_delivery_failure(client, contact_inbox, monkeypatch) -> None:
    monkeypatch.setattr(EmailService, "send", lambda self, *args, **kwargs: False)

    response = client.post("/api/contact", json=PAYLOAD)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

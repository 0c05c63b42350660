# tests/test_health.py
from typing import Any

from fastapi import status

from learnloop import __version__


def test_health(client: Any) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["version"] == __version__
    assert response.json()["docs"] == "/docs"


def test_unknown_route_uses_error_envelope(client: Any) -> None:
    response = client.get("/api/nowhere")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "not_found", "detail": "Not Found"}

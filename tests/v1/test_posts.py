# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status


def _payload(topic, **overrides):
    payload = {"title": "Closures explained", "content": "A closure captures variables.", "primaryTopicId": topic.id}
    payload.update(overrides)
    return payload


def test_create_post(client, auth_headers, author, topic) -> None:
    response = client.post("/api/posts", json=_payload(topic), headers=auth_headers(author))

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["title"] == "Closures explained"
    assert data["authorId"] == str(author.id)
    assert data["primaryTopic"]["id"] == topic.id
    assert data["isHidden"] is False


def test_create_post_requires_verified_email(client, auth_headers, unverified_user, topic) -> None:
    response = client.post("/api/posts", json=_payload(topic), headers=auth_headers(unverified_user))

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"] == "email_not_verified"


def test_create_post_requires_auth(client, topic) -> None:
    response = client.post("/api/posts", json=_payload(topic))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_title_limit(client, auth_headers, author, topic) -> None:
    response = client.post("/api/posts", json=_payload(topic, title="t" * 61), headers=auth_headers(author))

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_unknown_topic(client, auth_headers, author, topic) -> None:
    response = client.post(
        "/api/posts",
        json=_payload(topic, primaryTopicId=9999),
        headers=auth_headers(author),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_post(client, post) -> None:
    response = client.get(f"/api/posts/{post.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == post.id


def test_hidden_post_resolves_for_author_and_admin_only(
    client, auth_headers, make_post, author, other_user, admin_user
) -> None:
    hidden = make_post(author, is_hidden=True)
    url = f"/api/posts/{hidden.id}"

    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND
    assert client.get(url, headers=auth_headers(other_user)).status_code == status.HTTP_404_NOT_FOUND
    assert client.get(url, headers=auth_headers(author)).json()["isHidden"] is True
    assert client.get(url, headers=auth_headers(admin_user)).status_code == status.HTTP_200_OK


def test_update_post(client, auth_headers, author, post) -> None:
    response = client.put(
        f"/api/posts/{post.id}",
        json={"title": "Updated title"},
        headers=auth_headers(author),
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Updated title"
    assert response.json()["updatedAt"] is not None


def test_update_post_by_other_user(client, auth_headers, other_user, post) -> None:
    response = client.put(
        f"/api/posts/{post.id}",
        json={"title": "Hijacked"},
        headers=auth_headers(other_user),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_update_post_empty_body(client, auth_headers, author, post) -> None:
    response = client.put(f"/api/posts/{post.id}", json={}, headers=auth_headers(author))

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_post_is_soft(client, auth_headers, author, admin_user, post, db_session) -> None:
    response = client.delete(f"/api/posts/{post.id}", headers=auth_headers(author))

    assert response.status_code == status.HTTP_200_OK
    db_session.refresh(post)
    assert post.deleted_at is not None
    assert client.get(f"/api/posts/{post.id}", headers=auth_headers(author)).status_code == 404
    assert client.get(f"/api/posts/{post.id}", headers=auth_headers(admin_user)).status_code == 404


def test_delete_post_by_other_user(client, auth_headers, other_user, post) -> None:
    response = client.delete(f"/api/posts/{post.id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_403_FORBIDDEN

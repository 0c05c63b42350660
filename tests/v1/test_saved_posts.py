# mypy: ignore-errors
# tests/v1/test_saved_posts.py
"""Tests for bookmark endpoints."""

from fastapi import status


def test_save_and_list(client, auth_headers, other_user, post) -> None:
    response = client.post(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["postId"] == post.id

    listed = client.get("/api/saved-posts", headers=auth_headers(other_user)).json()["posts"]
    assert [p["id"] for p in listed] == [post.id]
    assert listed[0]["isSaved"] is True


def test_save_twice(client, auth_headers, other_user, post) -> None:
    client.post(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))
    response = client.post(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_409_CONFLICT


def test_save_missing_post(client, auth_headers, other_user) -> None:
    response = client.post("/api/saved-posts/777", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unsave(client, auth_headers, other_user, post) -> None:
    client.post(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))

    response = client.delete(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/saved-posts", headers=auth_headers(other_user)).json()["posts"] == []


def test_unsave_not_saved(client, auth_headers, other_user, post) -> None:
    response = client.delete(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_saved_list_drops_hidden_posts(client, auth_headers, db_session, other_user, post) -> None:
    client.post(f"/api/saved-posts/{post.id}", headers=auth_headers(other_user))
    post.is_hidden = True
    db_session.commit()

    listed = client.get("/api/saved-posts", headers=auth_headers(other_user)).json()["posts"]

    assert listed == []

# mypy: ignore-errors
# tests/v1/test_votes.py
"""Tests for vote endpoints."""

from fastapi import status


def test_upvote_post(client, auth_headers, db_session, author, other_user, post) -> None:
    response = client.post("/api/votes", json={"postId": post.id}, headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["type"] == "UPVOTE"
    assert response.json()["postId"] == post.id
    db_session.refresh(author)
    assert author.learning_score == 1


def test_upvote_comment(client, auth_headers, db_session, author, other_user, comment) -> None:
    response = client.post("/api/votes", json={"commentId": comment.id}, headers=auth_headers(author))

    assert response.status_code == status.HTTP_201_CREATED
    db_session.refresh(other_user)
    assert other_user.learning_score == 1


def test_vote_requires_single_target(client, auth_headers, other_user, post, comment) -> None:
    neither = client.post("/api/votes", json={}, headers=auth_headers(other_user))
    both = client.post(
        "/api/votes",
        json={"postId": post.id, "commentId": comment.id},
        headers=auth_headers(other_user),
    )

    assert neither.status_code == status.HTTP_400_BAD_REQUEST
    assert both.status_code == status.HTTP_400_BAD_REQUEST


def test_duplicate_vote(client, auth_headers, other_user, post) -> None:
    client.post("/api/votes", json={"postId": post.id}, headers=auth_headers(other_user))
    response = client.post("/api/votes", json={"postId": post.id}, headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_409_CONFLICT


def test_self_vote_forbidden(client, auth_headers, author, post) -> None:
    response = client.post("/api/votes", json={"postId": post.id}, headers=auth_headers(author))

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_vote_on_hidden_post(client, auth_headers, make_post, author, other_user) -> None:
    hidden = make_post(author, is_hidden=True)

    response = client.post("/api/votes", json={"postId": hidden.id}, headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_remove_vote(client, auth_headers, db_session, author, other_user, post) -> None:
    vote_id = client.post(
        "/api/votes", json={"postId": post.id}, headers=auth_headers(other_user)
    ).json()["id"]

    response = client.delete(f"/api/votes/{vote_id}", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_200_OK
    db_session.refresh(author)
    assert author.learning_score == 0
    feed = client.get("/api/feed/home", headers=auth_headers(other_user)).json()["posts"]
    assert feed[0]["hasVoted"] is False


def test_remove_someone_elses_vote(client, auth_headers, make_user, other_user, post) -> None:
    vote_id = client.post(
        "/api/votes", json={"postId": post.id}, headers=auth_headers(other_user)
    ).json()["id"]

    response = client.delete(f"/api/votes/{vote_id}", headers=auth_headers(make_user()))

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_remove_missing_vote(client, auth_headers, other_user) -> None:
    response = client.delete("/api/votes/31337", headers=auth_headers(other_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND

# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")
os.environ.setdefault("SMTP_HOST", "")

from learnloop.core.security import create_access_token, hash_password  # noqa: E402
from learnloop.db.session import Base  # noqa: E402
from learnloop.db.session import get_db as app_get_session  # noqa: E402
from learnloop.main import app as fastapi_app  # noqa: E402
from learnloop.models import Comment, Post, Topic, User, UserRole  # noqa: E402
from learnloop.services.rate_limit import get_rate_limiter  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

# Hashing is deliberately slow; reuse one hash for every fixture user.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    session_factory: sessionmaker[Session],
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Iterator[None]:
    limiter = get_rate_limiter()
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with sensible defaults."""

    def _make_user(
        username: str | None = None,
        *,
        is_admin: bool = False,
        email_verified: bool = True,
        role: UserRole = UserRole.USER,
    ) -> User:
        username = username or f"user_{next(_USER_COUNTER)}"
        user = User(
            email=f"{username.lower().replace(' ', '_')}@example.com",
            username=username,
            hashed_password=_PASSWORD_HASH,
            is_admin=is_admin,
            email_verified=email_verified,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_password() -> str:
    """Plain-text password of every user built by ``make_user``."""
    return TEST_PASSWORD


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper producing bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    return make_user("author")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("other")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin", is_admin=True)


@pytest.fixture()
def unverified_user(make_user: Callable[..., User]) -> User:
    return make_user("unverified", email_verified=False)


@pytest.fixture()
def reporters(make_user: Callable[..., User]) -> list[User]:
    """Six distinct users who did not write the fixture content."""
    return [make_user(f"reporter_{index}") for index in range(6)]


@pytest.fixture()
def topic(db_session: Session) -> Topic:
    topic = Topic(name="Python", description="All things Python")
    db_session.add(topic)
    db_session.commit()
    db_session.refresh(topic)
    return topic


@pytest.fixture()
def make_post(db_session: Session, topic: Topic) -> Callable[..., Post]:
    def _make_post(author: User, title: str = "Learning loops", **fields: Any) -> Post:
        post = Post(
            title=title,
            content=fields.pop("content", "A short note about what I learned today."),
            author_id=author.id,
            primary_topic_id=fields.pop("primary_topic_id", topic.id),
            **fields,
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def post(make_post: Callable[..., Post], author: User) -> Post:
    return make_post(author)


@pytest.fixture()
def comment(db_session: Session, post: Post, other_user: User) -> Comment:
    comment = Comment(
        content="This explanation really helped me understand it.",
        author_id=other_user.id,
        post_id=post.id,
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment

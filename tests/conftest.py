# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="inkwell-uploads-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkwell.core.security import create_access_token, hash_password
from inkwell.db.session import Base
from inkwell.db.session import get_db as app_get_session
from inkwell.main import app as fastapi_app
from inkwell.models import Notification, Post, User
from inkwell.services.ai import get_completion_client

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret1"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
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
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists password accounts."""

    def _make_user(
        username: str | None = None,
        email: str | None = None,
        password: str = TEST_PASSWORD,
    ) -> User:
        n = next(_USER_COUNTER)
        user = User(
            username=username or f"writer{n}",
            email=email or f"writer{n}@example.com",
            password_hash=hash_password(password),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user(username="alice", email="a@x.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user(username="bob", email="b@x.com")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists posts directly."""

    def _make_post(author: User, title: str = "Test post", **fields: Any) -> Post:
        post = Post(title=title, author_id=author.id, **fields)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a draft post owned by the primary user."""
    return make_post(test_user, title="Draft", content="Some words", tags=["intro"])


@pytest.fixture()
def make_notification(db_session: Session) -> Callable[..., Notification]:
    """Return a factory that persists notifications directly."""

    def _make_notification(recipient: User, **fields: Any) -> Notification:
        fields.setdefault("title", "Heads up")
        fields.setdefault("message", "Something happened")
        notification = Notification(recipient_id=recipient.id, **fields)
        db_session.add(notification)
        db_session.commit()
        db_session.refresh(notification)
        return notification

    return _make_notification


class FakeCompletionClient:
    """Records prompts and returns a canned answer or raises a given error."""

    def __init__(self, reply: str = "generated text", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list[dict[str, str]], int]] = []

    async def complete(self, messages: list[dict[str, str]], max_tokens: int) -> str:
        self.calls.append((messages, max_tokens))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def fake_completion(app: FastAPI) -> Iterator[FakeCompletionClient]:
    """Replace the AI provider client with an in-memory fake."""
    fake = FakeCompletionClient()
    app.dependency_overrides[get_completion_client] = lambda: fake
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_completion_client, None)

# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from sprout_community.core.actor import Actor
from sprout_community.core.security import create_access_token
from sprout_community.db.session import Base
from sprout_community.db.session import get_db as app_get_session
from sprout_community.main import app as fastapi_app
from sprout_community.models import ForumPost, PostStatus, User

TEST_DB_URL = "sqlite://"

POST_CONTENT = "My monstera has yellow leaves near the base, what am I doing wrong?"


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
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

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


def _make_user(db_session: Session, username: str, **flags: bool) -> User:
    user = User(username=username, **flags)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted regular member."""
    return _make_user(db_session, "fern_lover")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second regular member."""
    return _make_user(db_session, "cactus_fan")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create and return an administrator."""
    return _make_user(db_session, "head_gardener", is_admin=True)


@pytest.fixture()
def moderator_user(db_session: Session) -> User:
    """Create and return a moderator without admin rights."""
    return _make_user(db_session, "greenhouse_mod", is_moderator=True)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    return _headers(admin_user)


@pytest.fixture()
def moderator_auth_token(moderator_user: User) -> dict[str, str]:
    """Return authorization headers for the moderator."""
    return _headers(moderator_user)


@pytest.fixture()
def actor(test_user: User) -> Actor:
    return Actor.from_user(test_user)


@pytest.fixture()
def other_actor(other_user: User) -> Actor:
    return Actor.from_user(other_user)


@pytest.fixture()
def admin_actor(admin_user: User) -> Actor:
    return Actor.from_user(admin_user)


@pytest.fixture()
def moderator_actor(moderator_user: User) -> Actor:
    return Actor.from_user(moderator_user)


def _make_post(db_session: Session, author: User, status: PostStatus, **fields: str) -> ForumPost:
    post = ForumPost(
        title=fields.get("title", "Yellow monstera leaves"),
        content=fields.get("content", POST_CONTENT),
        category=fields.get("category", "questions"),
        author_id=author.id,
        status=status.value,
        rejection_reason=fields.get("rejection_reason"),
    )
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    return post


@pytest.fixture()
def make_post(db_session: Session, test_user: User):
    """Return a factory creating posts authored by the primary test user."""

    def _factory(status: PostStatus = PostStatus.APPROVED, **fields: str) -> ForumPost:
        return _make_post(db_session, test_user, status, **fields)

    return _factory


@pytest.fixture()
def pending_post(make_post) -> ForumPost:
    """Create a post awaiting moderation."""
    return make_post(PostStatus.PENDING)


@pytest.fixture()
def test_post(make_post) -> ForumPost:
    """Create an approved post open for votes and comments."""
    return make_post(PostStatus.APPROVED)

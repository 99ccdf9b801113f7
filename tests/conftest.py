# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from radical_api.api import dependencies
from radical_api.db.session import Base
from radical_api.db.session import get_db as app_get_session
from radical_api.main import app as fastapi_app
from radical_api.models import Comment, Dictator, Proposal, TimeTarget, User
from radical_api.services.media import LocalBlobStore
from radical_api.services.static_site import StaticSiteClient

TEST_DB_URL = "sqlite://"
STATIC_ORIGIN = "https://static.test"

INDEX_HTML = (
    "<!DOCTYPE html><html><head><title>RADICAL</title>"
    '<meta property="og:image" content="https://example.com/default.png">'
    '<meta name="twitter:image" content="https://example.com/default.png">'
    "</head><body><main id=\"app\"></main></body></html>"
)


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
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def memes_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "memes")


@pytest.fixture()
def audio_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "audio")


@pytest.fixture()
def static_pages() -> dict[str, tuple[int, str]]:
    """Pages served by the fake static origin, keyed by path."""
    return {
        "/index.html": (200, INDEX_HTML),
        "/radical/login.html": (200, "<html><head></head><body>login</body></html>"),
        "/styles.css": (200, "body { color: #ff0099; }"),
    }


@pytest.fixture()
def static_site(static_pages: dict[str, tuple[int, str]]) -> StaticSiteClient:
    def handler(request: httpx.Request) -> httpx.Response:
        status_code, body = static_pages.get(request.url.path, (404, "not found"))
        content_type = "text/css" if request.url.path.endswith(".css") else "text/html"
        return httpx.Response(status_code, text=body, headers={"content-type": content_type})

    return StaticSiteClient(base_url=STATIC_ORIGIN, transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    memes_store: LocalBlobStore,
    audio_store: LocalBlobStore,
    static_site: StaticSiteClient,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    overrides: dict[Callable[..., object], Callable[..., object]] = {
        app_get_session: _get_session_override,
        dependencies.get_memes_store: lambda: memes_store,
        dependencies.get_audio_store: lambda: audio_store,
        dependencies.get_static_site: lambda: static_site,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users."""

    def _make(user_id: str = "user_1", name: str = "Test User", **fields: object) -> User:
        user = User(id=user_id, name=name, created_at=1_700_000_000_000, **fields)
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def make_proposal(db_session: Session) -> Callable[..., Proposal]:
    """Return a factory that persists proposals."""

    def _make(
        proposal_id: str,
        author_id: str = "user_1",
        text: str = "Make public transport free",
        timestamp: int = 1_700_000_000_000,
        **fields: object,
    ) -> Proposal:
        proposal = Proposal(
            id=proposal_id,
            author_id=author_id,
            text=text,
            timestamp=timestamp,
            **fields,
        )
        db_session.add(proposal)
        db_session.commit()
        return proposal

    return _make


@pytest.fixture()
def user(make_user: Callable[..., User]) -> User:
    """Create the primary test user."""
    return make_user()


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create a second test user."""
    return make_user("user_2", "Other User")


@pytest.fixture()
def proposal(user: User, make_proposal: Callable[..., Proposal]) -> Proposal:
    """Create a baseline proposal authored by the primary user."""
    return make_proposal("proposal_1", author_id=user.id)


@pytest.fixture()
def comment(db_session: Session, proposal: Proposal, user: User) -> Comment:
    """Create a baseline comment on the baseline proposal."""
    comment = Comment(
        id="comment_1",
        proposal_id=proposal.id,
        user_id=user.id,
        comment_text="Agreed, and extend it to night buses",
        timestamp=1_700_000_100_000,
    )
    db_session.add(comment)
    db_session.commit()
    return comment


@pytest.fixture()
def login_choices(db_session: Session) -> tuple[str, str]:
    """Seed one dictator and one time target for emoji login."""
    db_session.add_all(
        [
            Dictator(id="napoleon", name="Napoleon"),
            Dictator(id="caesar", name="Julius Caesar"),
            TimeTarget(id="1789", label="1789"),
        ]
    )
    db_session.commit()
    return "napoleon", "1789"

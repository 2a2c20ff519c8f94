from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from vidtube.config import Settings
from vidtube.core.authenticator import RequestAuthenticator
from vidtube.core.sessions import RegisterRequest, SessionManager
from vidtube.core.store import CredentialStore
from vidtube.core.tokens import TokenIssuer
from vidtube.database import Database
from vidtube.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        access_token_secret="test-access-secret",
        refresh_token_secret="test-refresh-secret",
        access_token_expiry=timedelta(minutes=15),
        refresh_token_expiry=timedelta(days=1),
        database_url="sqlite://",
        media_dir=str(tmp_path / "media"),
        media_base_url="/media",
        cookie_secure=True,
        log_level="DEBUG",
    )


@pytest.fixture
def database(settings: Settings):
    db = Database(settings)
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session) -> CredentialStore:
    return CredentialStore(db_session)


@pytest.fixture
def tokens(settings: Settings) -> TokenIssuer:
    return TokenIssuer(settings)


@pytest.fixture
def sessions(store: CredentialStore, tokens: TokenIssuer) -> SessionManager:
    return SessionManager(store, tokens)


@pytest.fixture
def authenticator(store: CredentialStore, tokens: TokenIssuer) -> RequestAuthenticator:
    return RequestAuthenticator(store, tokens)


@pytest.fixture
def ada(sessions: SessionManager) -> dict:
    return sessions.register(RegisterRequest(
        fullname="Ada Lovelace",
        username="ada",
        email="ada@x.com",
        password="secret123",
        avatar="a.png",
    ))


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c

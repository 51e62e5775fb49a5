import os

# settings are read at import time; keep tests off the real database and secret
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest
from fastapi import BackgroundTasks
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from board_api.database import create_db_and_tables, get_session, make_engine
from board_api.dependencies import get_notifier, get_password_hasher, get_token_issuer
from board_api.main import app
from board_api.security import PasswordHasher, TokenIssuer
from board_api.services import AuthService, BoardService


class RecordingNotifier:
    """Notifier double that records calls and can be told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def send_password_reset_notification(self, email, name):
        self.calls.append((email, name))
        if self.fail:
            raise ConnectionError("smtp relay unreachable")


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture()
def tokens():
    return TokenIssuer("test-secret-key")


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def tasks():
    return BackgroundTasks()


@pytest.fixture()
def auth_service(session, hasher, tokens, notifier, tasks):
    return AuthService(session, hasher, tokens, notifier, tasks)


@pytest.fixture()
def board_service(session):
    return BoardService(session)


@pytest.fixture()
def make_user(auth_service):
    """Register a user and return its row."""
    def _make(name="alice", email="alice@example.com", password="secret123"):
        result = auth_service.register(name, email, password)
        assert result.success, result.message
        return auth_service.users.get_by_email(email)
    return _make


@pytest.fixture()
def client(engine, hasher, tokens, notifier):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture()
def login(client):
    """Register (if needed) and log in through the API; returns auth headers."""
    def _login(name="alice", email="alice@example.com", password="secret123"):
        client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        res = client.post("/api/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['data']['token']}"}
    return _login


@pytest.fixture()
def failing_notifier():
    return RecordingNotifier(fail=True)

"""
Shared fixtures for the BlogFusion test suite.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from blogfusion_server.config import Settings
from blogfusion_server.core.assistant import WritingAssistant
from blogfusion_server.database import build_storage
from blogfusion_server.main import create_app
from blogfusion_server.models import UserCreate


class FakeClock:
    """Clock that moves forward one second per call, or not at all when frozen."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeChatModel:
    """Stands in for the chat model; records every call."""

    def __init__(self, reply="A better draft.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return FakeMessage(self.reply)


@pytest.fixture
def settings():
    return Settings(
        jwt_secret_key="test-secret-key",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture(params=["memory", "sql"])
def storage(request, settings):
    """Storage for each backend; both must honour the same contract."""
    backend_settings = settings.model_copy(update={
        "storage_backend": request.param,
        "database_url": "sqlite://",
    })
    store = build_storage(backend_settings)
    yield store
    store.close()


@pytest.fixture
def memory_storage(settings):
    store = build_storage(settings)
    yield store
    store.close()


@pytest.fixture
def make_user(storage):
    def _make_user(username="alice", name=None):
        return storage.users.create_user(UserCreate(
            username=username,
            name=name or username.title(),
            hashed_password="not-a-real-hash",
        ))
    return _make_user


@pytest.fixture
def chat_model():
    return FakeChatModel()


@pytest.fixture
def assistant(chat_model):
    return WritingAssistant(llm=chat_model)


@pytest.fixture
def app(settings, memory_storage, assistant):
    return create_app(settings=settings, storage=memory_storage, assistant=assistant)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user over HTTP; returns (user, auth headers)."""
    def _register(username="alice", password="secret123", name=None, **extra):
        res = client.post("/api/auth/register", json={
            "username": username,
            "password": password,
            "name": name or username.title(),
            **extra,
        })
        assert res.status_code == 200, res.text
        body = res.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}
    return _register

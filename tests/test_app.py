"""
Tests for application assembly, configuration and storage lifecycle.
"""
import pytest
from fastapi.testclient import TestClient

from blogfusion_server.config import Settings
from blogfusion_server.database import build_storage
from blogfusion_server.main import create_app


def test_health(client, register):
    """Test the health endpoint reports the user count."""
    register("alice")
    res = client.get("/health")
    assert res.json() == {"status": "ok", "users": 1}


def test_apps_do_not_share_storage(settings, assistant):
    """Test each app builds its own store."""
    first = create_app(settings=settings, assistant=assistant)
    second = create_app(settings=settings, assistant=assistant)

    with TestClient(first) as a, TestClient(second) as b:
        a.post("/api/auth/register", json={"username": "alice", "password": "secret123", "name": "A"})
        assert a.get("/health").json()["users"] == 1
        assert b.get("/health").json()["users"] == 0


def test_sql_backend_end_to_end(settings, assistant, tmp_path):
    """Test the sql backend serves the API and keeps data across restarts."""
    sql_settings = settings.model_copy(update={
        "storage_backend": "sql",
        "database_url": f"sqlite:///{tmp_path / 'blog.db'}",
    })

    with TestClient(create_app(settings=sql_settings, assistant=assistant)) as client:
        token = client.post("/api/auth/register", json={
            "username": "alice", "password": "secret123", "name": "Alice",
        }).json()["token"]
        client.post(
            "/api/posts",
            json={"title": "Persisted", "content": "Body"},
            headers={"Authorization": f"Bearer {token}"},
        )

    with TestClient(create_app(settings=sql_settings, assistant=assistant)) as client:
        posts = client.get("/api/posts").json()
        assert [p["title"] for p in posts] == ["Persisted"]


def test_unknown_backend(settings):
    """Test a misconfigured backend fails loudly."""
    with pytest.raises(ValueError):
        build_storage(settings.model_copy(update={"storage_backend": "redis"}))


class TestSettings:
    """Tests for Settings.from_env."""

    def test_reads_environment(self, monkeypatch):
        """Test values come from the environment."""
        monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
        monkeypatch.setenv("STORAGE_BACKEND", "sql")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        settings = Settings.from_env()
        assert settings.jwt_secret_key == "from-env"
        assert settings.access_token_expire_minutes == 15
        assert settings.storage_backend == "sql"
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_generates_secret_when_missing(self, monkeypatch):
        """Test a random secret is used when none is configured."""
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
        first = Settings.from_env()
        second = Settings.from_env()
        assert first.jwt_secret_key
        assert first.jwt_secret_key != second.jwt_secret_key

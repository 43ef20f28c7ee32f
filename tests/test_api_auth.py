"""
Tests for registration, login and the access gate over HTTP.
"""
from datetime import timedelta

import pytest

from blogfusion_server.core.security import TokenCodec


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_returns_user_and_token(self, client):
        """Test registration returns the public user and a working token."""
        res = client.post("/api/auth/register", json={
            "username": "alice",
            "password": "secret123",
            "name": "Alice",
            "bio": "Writes things",
        })
        assert res.status_code == 200
        body = res.json()
        assert body["user"]["username"] == "alice"
        assert body["user"]["bio"] == "Writes things"
        assert "hashed_password" not in body["user"]
        assert "password" not in body["user"]

        me = client.get("/api/auth/me", headers=bearer(body["token"]))
        assert me.json()["id"] == body["user"]["id"]

    def test_register_with_avatar(self, register, client):
        """Test the avatar URL is stored and shown with the public user."""
        user, headers = register("alice", avatar="https://img.example/alice.png")
        assert user["avatar"] == "https://img.example/alice.png"
        assert client.get("/api/auth/me", headers=headers).json()["avatar"] == "https://img.example/alice.png"

    def test_duplicate_username(self, client, register, memory_storage):
        """Test a second registration with the same username is a conflict."""
        register("alice")
        res = client.post("/api/auth/register", json={
            "username": "alice",
            "password": "another1",
            "name": "Other Alice",
        })
        assert res.status_code == 409
        assert res.json()["detail"] == "Username already exists"
        assert len(memory_storage.users) == 1

    @pytest.mark.parametrize("missing", ["username", "password", "name"])
    def test_missing_required_field(self, client, missing):
        """Test each required registration field is enforced."""
        payload = {"username": "alice", "password": "secret123", "name": "Alice"}
        del payload[missing]
        assert client.post("/api/auth/register", json=payload).status_code == 422

    def test_password_is_stored_hashed(self, register, memory_storage):
        """Test the stored credential is not the clear-text password."""
        register("alice", password="secret123")
        stored = memory_storage.users.get_user_by_username("alice")
        assert stored.hashed_password != "secret123"
        assert stored.hashed_password.startswith("$2")


class TestLogin:
    """Tests for POST /api/auth/login and POST /token."""

    def test_login(self, client, register):
        """Test correct credentials return a token for the same user."""
        user, _ = register("alice", password="secret123")
        res = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
        assert res.status_code == 200
        assert res.json()["user"]["id"] == user["id"]

    @pytest.mark.parametrize("username,password", [("alice", "wrong-pass"), ("nobody", "secret123")])
    def test_bad_credentials(self, client, register, username, password):
        """Test wrong password and unknown user fail identically."""
        register("alice", password="secret123")
        res = client.post("/api/auth/login", json={"username": username, "password": password})
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid credentials"

    def test_oauth2_form_login(self, client, register):
        """Test the OAuth2 password form endpoint issues a bearer token."""
        register("alice", password="secret123")
        res = client.post("/token", data={"username": "alice", "password": "secret123"})
        assert res.status_code == 200
        body = res.json()
        assert body["token_type"] == "bearer"
        assert client.get("/api/auth/me", headers=bearer(body["access_token"])).status_code == 200


class TestGate:
    """Tests for the bearer-token gate on protected routes."""

    def test_missing_token(self, client):
        """Test a request without a token is unauthenticated."""
        res = client.get("/api/auth/me")
        assert res.status_code == 401
        assert res.headers["www-authenticate"] == "Bearer"

    def test_rejections_look_the_same(self, client, register, settings):
        """Test every kind of bad token gets the same 401 response."""
        register("alice")
        alice_id = client.app.state.storage.users.get_user_by_username("alice").id
        codec = TokenCodec(settings.jwt_secret_key)

        tokens = [
            "garbage",
            TokenCodec("wrong-secret").create_access_token(alice_id),
            codec.create_access_token(alice_id, expires_delta=timedelta(seconds=-5)),
            codec.create_access_token("no-such-user"),
        ]
        responses = [client.get("/api/posts/my", headers=bearer(t)) for t in tokens]

        assert {r.status_code for r in responses} == {401}
        assert len({r.json()["detail"] for r in responses}) == 1

    def test_valid_token_resolves_user(self, client, register):
        """Test a valid token attaches the right identity."""
        user, headers = register("alice")
        res = client.get("/api/auth/me", headers=headers)
        assert res.status_code == 200
        assert res.json() == user

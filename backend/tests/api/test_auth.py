"""Tests for the auth endpoints."""

from modules.auth.exceptions import ExternalExchangeError


class TestLoginUrl:
    def test_get_login_url(self, client, fake_oauth):
        response = client.get("/api/auth/login", params={"state": "abc"})
        assert response.status_code == 200
        assert response.json()["url"].startswith("https://discord.com/api/oauth2/authorize")
        fake_oauth.authorize_url.assert_called_once_with("abc")

    def test_real_client_builds_url(self, client):
        """Without a mock the configured client id appears in the URL."""
        response = client.get("/api/auth/login")
        assert "client_id=client-id" in response.json()["url"]


class TestCallback:
    def test_successful_login(self, client, container, fake_oauth):
        response = client.post("/api/auth/callback", json={"code": "the-code"})

        assert response.status_code == 200
        data = response.json()
        assert data["is_authenticated"] is True
        assert data["username"] == "steve"
        assert data["first_name"] == "Steve"
        assert data["last_name"] == "Builder"
        assert "token" not in data
        assert container.store.get_user_by_discord_id("42") is not None

    def test_cancelled_login(self, client, fake_oauth):
        response = client.post("/api/auth/callback", json={"error": "access_denied"})

        assert response.status_code == 401
        data = response.json()
        assert data["error"] == "LOGIN_FAILED"
        assert data["message"] == "Login was cancelled or failed"
        assert data["details"] == {"reason": "access_denied"}

    def test_exchange_failure_is_401(self, client, container, fake_oauth):
        fake_oauth.exchange_code.side_effect = ExternalExchangeError("rejected", step="token")

        response = client.post("/api/auth/callback", json={"code": "bad"})

        assert response.status_code == 401
        assert response.json()["details"]["reason"] == "token"
        assert container.session.get_state().is_authenticated is False

    def test_missing_code(self, client, fake_oauth):
        response = client.post("/api/auth/callback", json={})
        assert response.status_code == 401
        assert response.json()["details"]["reason"] == "missing_code"


class TestSession:
    def test_logged_out_session(self, client):
        data = client.get("/api/auth/session").json()
        assert data["is_authenticated"] is False
        assert data["user"] is None
        assert data["username"] == "Discord User"
        assert data["avatar_url"].endswith("/embed/avatars/0.png")

    def test_logged_in_session(self, client, logged_in):
        data = client.get("/api/auth/session").json()
        assert data["is_authenticated"] is True
        assert data["user"]["id"] == "42"
        assert data["email"] == "steve@example.com"

    def test_logout(self, client, container, logged_in):
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["is_authenticated"] is False
        assert container.session.get_state().is_authenticated is False

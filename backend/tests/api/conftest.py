"""Fixtures for API tests: a memory-backed container and a test client."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from api.app import app
from api.dependencies import ServiceContainer, set_container
from shared.config import Settings
from modules.auth.models import DiscordTokenResponse


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        order_processing_delay=0,
        order_webhook_url="",
        discord_client_id="client-id",
        discord_client_secret="client-secret",
    )


@pytest.fixture
def container(settings) -> ServiceContainer:
    container = ServiceContainer(settings)
    set_container(container)
    return container


@pytest.fixture
def fake_oauth(container, profile) -> MagicMock:
    """Replace the Discord client with a mock that always succeeds."""
    oauth = MagicMock()
    oauth.authorize_url.return_value = "https://discord.com/api/oauth2/authorize?client_id=client-id"
    oauth.exchange_code = AsyncMock(return_value=DiscordTokenResponse(access_token="access-token"))
    oauth.fetch_profile = AsyncMock(return_value=profile)
    oauth.join_guild = AsyncMock(return_value=False)
    container._oauth = oauth
    return oauth


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(app)


@pytest.fixture
def logged_in(container, profile):
    """Log the test profile in directly through the store and session."""
    container.store.record_login(profile)
    container.session.set_auth(profile, "access-token")
    return container.session.get_state()

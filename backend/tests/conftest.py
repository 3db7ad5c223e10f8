"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone

from api.dependencies import reset_container
from shared.models import DiscordProfile
from shared.storage import MemoryStorage
from modules.auth.session import AuthSessionManager
from modules.store.service import PersistentStore


class FakeClock:
    """Settable clock; advance() moves it forward."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def build_profile(
    discord_id: str = "42",
    username: str = "steve",
    global_name: str | None = "Steve Builder",
    email: str | None = "steve@example.com",
    **kwargs,
) -> DiscordProfile:
    """Create a Discord profile for tests."""
    return DiscordProfile(
        id=discord_id,
        username=username,
        global_name=global_name,
        email=email,
        **kwargs,
    )


@pytest.fixture(autouse=True)
def reset_container_singleton():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def storage() -> MemoryStorage:
    """Provide an empty in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fixed clock starting 2025-01-01 12:00 UTC."""
    return FakeClock(datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(storage: MemoryStorage, clock: FakeClock) -> PersistentStore:
    """Provide a store over the in-memory storage."""
    return PersistentStore(storage, clock=clock)


@pytest.fixture
def session_manager(storage: MemoryStorage) -> AuthSessionManager:
    """Provide a session manager over the in-memory storage."""
    return AuthSessionManager(storage)


@pytest.fixture
def profile() -> DiscordProfile:
    """Provide a consistent Discord profile."""
    return build_profile()


@pytest.fixture
def make_profile():
    """Provide a factory for Discord profiles (keyword overrides)."""
    return build_profile

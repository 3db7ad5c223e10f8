"""Tests for shared/models.py."""

import pytest
from pydantic import ValidationError

from shared.models import DiscordProfile


class TestDiscordProfile:
    def test_minimal_profile(self):
        """Only id and username are required."""
        profile = DiscordProfile(id="42", username="steve")
        assert profile.global_name is None
        assert profile.email is None
        assert profile.avatar is None

    def test_ignores_extra_discord_fields(self):
        """Fields the storefront does not use should be dropped."""
        profile = DiscordProfile.model_validate(
            {"id": "42", "username": "steve", "locale": "en-GB", "mfa_enabled": True}
        )
        assert not hasattr(profile, "locale")

    def test_rejects_empty_id(self):
        """A profile without a Discord ID is unusable."""
        with pytest.raises(ValidationError):
            DiscordProfile(id="", username="steve")

    def test_is_immutable(self):
        """Profiles should be frozen."""
        profile = DiscordProfile(id="42", username="steve")
        with pytest.raises(ValidationError):
            profile.username = "alex"

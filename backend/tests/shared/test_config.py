"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os
from pathlib import Path

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Vortex Cloud Storefront"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "127.0.0.1"
        assert settings.app_version == "0.1.0"
        assert settings.storage_backend == "file"
        assert settings.data_dir == Path(".vortex")
        assert settings.order_processing_delay == 2.0
        assert settings.order_code_prefix == "MC"
        assert settings.currency_symbol == "₹"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_discord_config_from_env(self):
        """Settings should load Discord configuration from environment variables."""
        with patch.dict(os.environ, {
            "DISCORD_CLIENT_ID": "client-123",
            "DISCORD_CLIENT_SECRET": "secret-456",
            "DISCORD_GUILD_ID": "guild-789",
        }):
            settings = Settings(_env_file=None)
            assert settings.discord_client_id == "client-123"
            assert settings.discord_client_secret == "secret-456"
            assert settings.discord_guild_id == "guild-789"

    def test_loads_storage_config_from_env(self):
        """Settings should load the storage backend and data directory."""
        with patch.dict(os.environ, {"STORAGE_BACKEND": "memory", "DATA_DIR": "/tmp/vortex"}):
            settings = Settings(_env_file=None)
            assert settings.storage_backend == "memory"
            assert settings.data_dir == Path("/tmp/vortex")

    def test_rejects_unknown_storage_backend(self):
        """Only 'file' and 'memory' backends exist."""
        with pytest.raises(ValueError):
            Settings(_env_file=None, storage_backend="redis")


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        # Clear the cache first
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        # Clear the cache first
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

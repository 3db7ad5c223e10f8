"""
Centralized configuration for the Vortex Cloud storefront backend.

All settings are loaded from environment variables with sensible defaults.
Integration-specific settings are namespaced (e.g., DISCORD_*, ORDER_*).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Vortex Cloud Storefront"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Persistence
    storage_backend: Literal["file", "memory"] = "file"
    data_dir: Path = Path(".vortex")

    # Discord OAuth
    discord_client_id: str = ""
    discord_client_secret: str = ""
    discord_redirect_uri: str = "http://localhost:5173"
    discord_api_base: str = "https://discord.com/api"
    discord_guild_id: str = ""
    discord_bot_token: str = ""

    # Orders
    order_webhook_url: str = ""
    order_processing_delay: float = 2.0  # seconds
    order_code_prefix: str = "MC"
    currency_symbol: str = "₹"

    # Outbound HTTP
    http_timeout: float = 30.0  # seconds

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

"""
Shared infrastructure for the storefront backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- storage: Key/value storage backends (JSON files, memory)
- repository: Collection persistence on top of a storage backend
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .storage import KeyValueStorage, JsonFileStorage, MemoryStorage, create_storage
from .exceptions import (
    StorefrontError,
    ValidationError,
    IntegrityError,
    AuthenticationError,
    ExternalServiceError,
)
from .models import DiscordProfile

__all__ = [
    "Settings",
    "get_settings",
    "KeyValueStorage",
    "JsonFileStorage",
    "MemoryStorage",
    "create_storage",
    "StorefrontError",
    "ValidationError",
    "IntegrityError",
    "AuthenticationError",
    "ExternalServiceError",
    "DiscordProfile",
]

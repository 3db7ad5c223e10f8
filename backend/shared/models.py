"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class DiscordProfile(BaseModel):
    """
    Identity returned by the Discord ``/users/@me`` endpoint.

    Used by the auth module (the session's user) and the store module
    (users are keyed by the profile's id). Only the fields the storefront
    needs are declared; anything else Discord sends is dropped.
    """

    id: str = Field(..., min_length=1, description="Discord user ID (snowflake)")
    username: str = Field(..., description="Discord username")
    global_name: Optional[str] = Field(None, description="Display name")
    discriminator: Optional[str] = Field(None, description="Legacy discriminator")
    email: Optional[str] = Field(None, description="Email (requires 'email' scope)")
    avatar: Optional[str] = Field(None, description="Avatar hash")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from Discord
    }

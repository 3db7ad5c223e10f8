"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from shared.models import DiscordProfile

DISCORD_CDN_URL = "https://cdn.discordapp.com"


class AuthSession(BaseModel):
    """
    The process-wide login state.

    ``user`` is present exactly when ``is_authenticated`` is true, and a
    token only accompanies an authenticated session. Instances are
    immutable; the session manager replaces them whole.
    """

    is_authenticated: bool = Field(default=False, description="Whether a user is logged in")
    user: Optional[DiscordProfile] = Field(None, description="Logged-in Discord profile")
    token: Optional[str] = Field(None, description="Discord access token")

    model_config = {"frozen": True}  # Make immutable for safety

    @model_validator(mode="after")
    def _user_iff_authenticated(self) -> "AuthSession":
        if self.is_authenticated != (self.user is not None):
            raise ValueError("user must be set if and only if is_authenticated is true")
        if not self.is_authenticated and self.token is not None:
            raise ValueError("a logged-out session cannot carry a token")
        return self


LOGGED_OUT = AuthSession()


class DiscordTokenResponse(BaseModel):
    """Response of Discord's ``/oauth2/token`` endpoint."""

    access_token: str = Field(..., min_length=1)
    token_type: str = Field(default="Bearer")
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    model_config = {"extra": "ignore"}


def default_avatar_url(profile: Optional[DiscordProfile]) -> str:
    """
    Discord's default avatar for a profile.

    Legacy accounts pick by discriminator; migrated accounts by user ID.
    """
    index = 0
    if profile is not None:
        if profile.discriminator and profile.discriminator != "0" and profile.discriminator.isdigit():
            index = int(profile.discriminator) % 5
        elif profile.id.isdigit():
            index = (int(profile.id) >> 22) % 6
    return f"{DISCORD_CDN_URL}/embed/avatars/{index}.png"


def avatar_url(profile: Optional[DiscordProfile], size: Optional[int] = None) -> str:
    """CDN URL of a profile's avatar, falling back to the default avatar."""
    if profile is None or not profile.avatar:
        return default_avatar_url(profile)
    extension = "gif" if profile.avatar.startswith("a_") else "png"
    url = f"{DISCORD_CDN_URL}/avatars/{profile.id}/{profile.avatar}.{extension}"
    return f"{url}?size={size}" if size else url


class SessionView(BaseModel):
    """Session as shown to the client: profile projections, never the token."""

    is_authenticated: bool
    user: Optional[DiscordProfile] = None
    first_name: str = ""
    last_name: str = ""
    username: str
    display_name: str
    email: str = ""
    avatar_url: str

"""
Discord OAuth2 client.

Implements the authorization-code flow against Discord: build the consent
URL, trade the code for a token, fetch the user, and optionally add the
user to the community server.

Endpoints (relative to the API base, https://discord.com/api):
- /oauth2/authorize
- /oauth2/token
- /users/@me
- /guilds/{guild_id}/members/{user_id}
"""

import logging
from typing import Any, Optional
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError as PydanticValidationError

from shared.models import DiscordProfile

from .exceptions import ExternalExchangeError
from .interfaces import IOAuthClient
from .models import DiscordTokenResponse

logger = logging.getLogger(__name__)


class DiscordOAuthClient(IOAuthClient):
    """Discord OAuth2 collaborator."""

    BASE_SCOPES = ("identify", "email")
    GUILD_SCOPE = "guilds.join"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        api_base: str = "https://discord.com/api",
        guild_id: Optional[str] = None,
        bot_token: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._api_base = api_base.rstrip("/")
        self._guild_id = guild_id or ""
        self._bot_token = bot_token or ""
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        """Check if client credentials are configured."""
        return bool(self._client_id and self._client_secret)

    @property
    def can_join_guild(self) -> bool:
        return bool(self._guild_id and self._bot_token)

    @property
    def scopes(self) -> tuple[str, ...]:
        if self.can_join_guild:
            return self.BASE_SCOPES + (self.GUILD_SCOPE,)
        return self.BASE_SCOPES

    def authorize_url(self, state: Optional[str] = None) -> str:
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
        }
        if state:
            params["state"] = state
        return f"{self._api_base}/oauth2/authorize?{urlencode(params, quote_via=quote)}"

    async def _request(
        self,
        step: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(method, f"{self._api_base}{path}", **kwargs)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            logger.error(f"Discord {step} failed: HTTP {e.response.status_code} {e.response.text}")
            raise ExternalExchangeError(
                f"Discord {step} request was rejected",
                step=step,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ExternalExchangeError(f"Discord {step} request failed: {e}", step=step) from e

    @staticmethod
    def _json(response: httpx.Response, step: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ExternalExchangeError(f"Discord {step} response is not JSON", step=step) from e

    async def exchange_code(self, code: str) -> DiscordTokenResponse:
        if not self.is_configured:
            raise ExternalExchangeError("Discord OAuth is not configured", step="token")

        response = await self._request(
            "token",
            "POST",
            "/oauth2/token",
            data={
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self._redirect_uri,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        try:
            return DiscordTokenResponse.model_validate(self._json(response, "token"))
        except PydanticValidationError as e:
            raise ExternalExchangeError("Discord token response has no access token", step="token") from e

    async def fetch_profile(self, access_token: str) -> DiscordProfile:
        response = await self._request(
            "profile",
            "GET",
            "/users/@me",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        try:
            return DiscordProfile.model_validate(self._json(response, "profile"))
        except PydanticValidationError as e:
            raise ExternalExchangeError("Discord profile response is incomplete", step="profile") from e

    async def join_guild(self, user_id: str, access_token: str) -> bool:
        """
        Add the user to the community server.

        Needs a bot token and the guilds.join scope; without them this
        returns False and the user joins manually.
        """
        if not self.can_join_guild:
            logger.debug("Guild auto-join not configured, skipping")
            return False

        await self._request(
            "guild_join",
            "PUT",
            f"/guilds/{self._guild_id}/members/{user_id}",
            json={"access_token": access_token},
            headers={"Authorization": f"Bot {self._bot_token}"},
        )
        logger.info(f"Added user {user_id} to guild {self._guild_id}")
        return True

"""
Login service implementation.

Turns an OAuth redirect into a session: exchanges the code with Discord,
records the login in the store, and hands the profile to the session
manager.
"""

import logging
from typing import Optional

from modules.store.interfaces import IStore

from .exceptions import ExternalExchangeError, LoginFailedError
from .interfaces import IAuthSessionManager, ILoginService, IOAuthClient
from .models import AuthSession

logger = logging.getLogger(__name__)


class LoginService(ILoginService):
    """
    Implementation of the login flow.

    A failed login never touches the session: it is only replaced once
    the exchange succeeded and the user is stored.
    """

    def __init__(
        self,
        session: IAuthSessionManager,
        store: IStore,
        oauth: IOAuthClient,
    ):
        self._session = session
        self._store = store
        self._oauth = oauth

    def login_url(self, state: Optional[str] = None) -> str:
        return self._oauth.authorize_url(state)

    async def complete_login(
        self,
        code: Optional[str],
        error: Optional[str] = None,
    ) -> AuthSession:
        if error:
            logger.info(f"Discord login cancelled or refused: {error}")
            raise LoginFailedError("Login was cancelled or failed", reason=error)

        if not code:
            raise LoginFailedError("Missing authorization code", reason="missing_code")

        current = self._session.get_state()
        if current.is_authenticated:
            logger.info("Already logged in; ignoring authorization code")
            return current

        try:
            token = await self._oauth.exchange_code(code)
            profile = await self._oauth.fetch_profile(token.access_token)
        except ExternalExchangeError as e:
            logger.error(f"OAuth callback error at {e.step}: {e.message}")
            raise LoginFailedError(reason=e.step) from e

        try:
            await self._oauth.join_guild(profile.id, token.access_token)
        except ExternalExchangeError as e:
            logger.warning(f"Auto-join failed, user will need to join manually: {e.message}")

        self._store.record_login(profile)
        self._session.set_auth(profile, token.access_token)
        return self._session.get_state()

    def logout(self) -> AuthSession:
        self._session.clear_auth()
        return self._session.get_state()

"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
OAuth provider.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import DiscordProfile

from .models import AuthSession, DiscordTokenResponse


class AuthStateListener(Protocol):
    """Callback invoked with the new session after every change."""

    def __call__(self, state: AuthSession) -> None: ...


@runtime_checkable
class ISubscription(Protocol):
    """Handle returned by subscribe(); calling it unsubscribes."""

    def __call__(self) -> None: ...

    def unsubscribe(self) -> None: ...


@runtime_checkable
class IAuthSessionManager(Protocol):
    """
    Interface for the process-wide session owner.

    Exactly one instance exists per process; every consumer receives the
    same instance.
    """

    def get_state(self) -> AuthSession:
        """Current session snapshot."""
        ...

    def subscribe(self, listener: AuthStateListener) -> ISubscription:
        """Register a listener for session changes."""
        ...

    def set_auth(self, profile: DiscordProfile, token: str) -> None:
        """Replace the session with an authenticated one and persist it."""
        ...

    def clear_auth(self) -> None:
        """Replace the session with the logged-out one and drop the persisted copy."""
        ...


@runtime_checkable
class IOAuthClient(Protocol):
    """
    The external OAuth collaborator.

    All network methods raise ExternalExchangeError on failure.
    """

    def authorize_url(self, state: Optional[str] = None) -> str:
        """URL to send the user to for consent."""
        ...

    async def exchange_code(self, code: str) -> DiscordTokenResponse:
        """Trade an authorization code for an access token."""
        ...

    async def fetch_profile(self, access_token: str) -> DiscordProfile:
        """Fetch the profile of the token's owner."""
        ...

    async def join_guild(self, user_id: str, access_token: str) -> bool:
        """Add the user to the community server. False if not configured."""
        ...


@runtime_checkable
class ILoginService(Protocol):
    """Interface for the login flow."""

    def login_url(self, state: Optional[str] = None) -> str:
        """URL that starts a Discord login."""
        ...

    async def complete_login(
        self,
        code: Optional[str],
        error: Optional[str] = None,
    ) -> AuthSession:
        """
        Finish a login from the OAuth redirect.

        Raises:
            LoginFailedError: If the user cancelled or the exchange failed
        """
        ...

    def logout(self) -> AuthSession:
        """Log out and return the logged-out session."""
        ...

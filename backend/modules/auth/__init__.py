"""
Authentication module.

Handles Discord login, the process-wide auth session, and profile
projections for the storefront.

Public API:
- IAuthSessionManager: Interface for the session owner
- IOAuthClient: Interface for the OAuth collaborator
- ILoginService: Interface for the login flow
- AuthSession: The session record
- Auth exceptions: ExternalExchangeError, LoginFailedError
"""

from .interfaces import (
    AuthStateListener,
    IAuthSessionManager,
    ILoginService,
    IOAuthClient,
    ISubscription,
)
from .models import AuthSession, LOGGED_OUT, DiscordTokenResponse, SessionView
from .exceptions import ExternalExchangeError, LoginFailedError

__all__ = [
    # Interfaces
    "AuthStateListener",
    "IAuthSessionManager",
    "ILoginService",
    "IOAuthClient",
    "ISubscription",
    # Models
    "AuthSession",
    "LOGGED_OUT",
    "DiscordTokenResponse",
    "SessionView",
    # Exceptions
    "ExternalExchangeError",
    "LoginFailedError",
]

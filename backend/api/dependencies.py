"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container is the single owner of the process-wide state: one storage
backend, one store, one session manager. Every consumer (routes, the
admin CLI) receives these same instances.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.storage import KeyValueStorage
    from modules.auth.interfaces import ILoginService, IOAuthClient
    from modules.auth.session import AuthSessionManager
    from modules.orders.interfaces import IOrderNotifier, IOrderService
    from modules.store.interfaces import IStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._storage: "KeyValueStorage | None" = None
        self._store: "IStore | None" = None
        self._session: "AuthSessionManager | None" = None
        self._oauth: "IOAuthClient | None" = None
        self._login: "ILoginService | None" = None
        self._notifier: "IOrderNotifier | None" = None
        self._orders: "IOrderService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def storage(self) -> "KeyValueStorage":
        """Get the storage backend."""
        if self._storage is None:
            from shared.storage import create_storage
            self._storage = create_storage(self.settings)
        return self._storage

    @property
    def store(self) -> "IStore":
        """Get the persistent store instance."""
        if self._store is None:
            from modules.store.service import PersistentStore
            self._store = PersistentStore(
                self.storage,
                order_code_prefix=self.settings.order_code_prefix,
            )
        return self._store

    @property
    def session(self) -> "AuthSessionManager":
        """Get the auth session manager instance."""
        if self._session is None:
            from modules.auth.session import AuthSessionManager
            self._session = AuthSessionManager(self.storage)
        return self._session

    @property
    def oauth(self) -> "IOAuthClient":
        """Get the Discord OAuth client."""
        if self._oauth is None:
            from modules.auth.oauth import DiscordOAuthClient
            settings = self.settings
            self._oauth = DiscordOAuthClient(
                client_id=settings.discord_client_id,
                client_secret=settings.discord_client_secret,
                redirect_uri=settings.discord_redirect_uri,
                api_base=settings.discord_api_base,
                guild_id=settings.discord_guild_id,
                bot_token=settings.discord_bot_token,
                timeout=settings.http_timeout,
            )
        return self._oauth

    @property
    def login(self) -> "ILoginService":
        """Get the login service instance."""
        if self._login is None:
            from modules.auth.service import LoginService
            self._login = LoginService(
                session=self.session,
                store=self.store,
                oauth=self.oauth,
            )
        return self._login

    @property
    def notifier(self) -> "IOrderNotifier":
        """Get the order notification sink."""
        if self._notifier is None:
            from modules.orders.notifier import DiscordWebhookNotifier
            self._notifier = DiscordWebhookNotifier(
                webhook_url=self.settings.order_webhook_url,
                timeout=self.settings.http_timeout,
                currency_symbol=self.settings.currency_symbol,
            )
        return self._notifier

    @property
    def orders(self) -> "IOrderService":
        """Get the order service instance."""
        if self._orders is None:
            from modules.orders.service import OrderService
            self._orders = OrderService(
                store=self.store,
                notifier=self.notifier,
                processing_delay=self.settings.order_processing_delay,
                order_code_prefix=self.settings.order_code_prefix,
                currency_symbol=self.settings.currency_symbol,
            )
        return self._orders

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._storage = None
        self._store = None
        self._session = None
        self._oauth = None
        self._login = None
        self._notifier = None
        self._orders = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, CLI with custom settings)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_store() -> "IStore":
    """FastAPI dependency for the persistent store."""
    return get_container().store


def get_session_manager() -> "AuthSessionManager":
    """FastAPI dependency for the auth session manager."""
    return get_container().session


def get_login_service() -> "ILoginService":
    """FastAPI dependency for the login service."""
    return get_container().login


def get_order_service() -> "IOrderService":
    """FastAPI dependency for the order service."""
    return get_container().orders

"""
Auth session manager.

Owns the process-wide AuthSession: loads it from storage at start-up,
replaces it on login/logout, persists every change, and then notifies
subscribers.
"""

import itertools
import logging
import threading
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.models import DiscordProfile
from shared.storage import KeyValueStorage

from .interfaces import AuthStateListener, IAuthSessionManager
from .models import LOGGED_OUT, AuthSession, SessionView, avatar_url

logger = logging.getLogger(__name__)

SESSION_KEY = "auth_session"
DEFAULT_USERNAME = "Discord User"


class Subscription:
    """Unsubscribe handle. Calling it more than once is harmless."""

    def __init__(self, manager: "AuthSessionManager", token: int):
        self._manager = manager
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._manager._remove_listener(self._token)
            self._active = False

    def __call__(self) -> None:
        self.unsubscribe()


class AuthSessionManager(IAuthSessionManager):
    """
    Implementation of the session manager.

    Listeners run synchronously, after the new session has been persisted.
    A listener that raises is logged and does not stop delivery to the rest.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage
        self._lock = threading.RLock()
        self._listeners: dict[int, AuthStateListener] = {}
        self._tokens = itertools.count(1)
        self._state = self._load()

    def _load(self) -> AuthSession:
        raw = self._storage.get(SESSION_KEY)
        if raw is None:
            return LOGGED_OUT
        try:
            return AuthSession.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Discarding unreadable persisted session: {e}")
            return LOGGED_OUT

    def get_state(self) -> AuthSession:
        with self._lock:
            return self._state

    def subscribe(self, listener: AuthStateListener) -> Subscription:
        with self._lock:
            token = next(self._tokens)
            self._listeners[token] = listener
        return Subscription(self, token)

    def _remove_listener(self, token: int) -> None:
        with self._lock:
            self._listeners.pop(token, None)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def set_auth(self, profile: DiscordProfile, token: str) -> None:
        state = AuthSession(is_authenticated=True, user=profile, token=token)
        with self._lock:
            self._storage.set(SESSION_KEY, state.model_dump_json())
            self._state = state
            self._notify(state)
        logger.info(f"Logged in as {profile.username} ({profile.id})")

    def clear_auth(self) -> None:
        with self._lock:
            self._storage.delete(SESSION_KEY)
            self._state = LOGGED_OUT
            self._notify(LOGGED_OUT)
        logger.info("Logged out")

    def _notify(self, state: AuthSession) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener(state)
            except Exception:
                logger.exception("Auth state listener failed")

    # -------------------------------------------------------------------------
    # Profile projections. These never fail; missing fields degrade to defaults.
    # -------------------------------------------------------------------------

    @property
    def _profile(self) -> Optional[DiscordProfile]:
        return self.get_state().user

    def _name_parts(self) -> list[str]:
        profile = self._profile
        if profile is None:
            return []
        return (profile.global_name or profile.username or "").split()

    @property
    def first_name(self) -> str:
        parts = self._name_parts()
        return parts[0] if parts else ""

    @property
    def last_name(self) -> str:
        profile = self._profile
        if profile is None or not profile.global_name:
            return ""
        return " ".join(profile.global_name.split()[1:])

    @property
    def discord_username(self) -> str:
        profile = self._profile
        return profile.username if profile and profile.username else DEFAULT_USERNAME

    @property
    def display_name(self) -> str:
        profile = self._profile
        if profile is None:
            return DEFAULT_USERNAME
        return profile.global_name or profile.username or DEFAULT_USERNAME

    @property
    def email(self) -> str:
        profile = self._profile
        return profile.email if profile and profile.email else ""

    @property
    def avatar_url(self) -> str:
        return avatar_url(self._profile)

    def view(self) -> SessionView:
        """Token-free projection of the current session for clients."""
        state = self.get_state()
        return SessionView(
            is_authenticated=state.is_authenticated,
            user=state.user,
            first_name=self.first_name,
            last_name=self.last_name,
            username=self.discord_username,
            display_name=self.display_name,
            email=self.email,
            avatar_url=self.avatar_url,
        )

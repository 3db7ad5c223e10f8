"""
Base exception classes for the storefront backend.

Modules raise subclasses of these bases; the API maps each base to one
HTTP status and renders ``to_dict()`` as the response body.

Lookup misses are never exceptions: the store returns None or False for
absent records and only raises for integrity violations.
"""

from typing import Optional, Any


class StorefrontError(Exception):
    """
    Root of every error the backend raises on purpose.

    ``code`` is a stable machine-readable identifier (defaults to the
    class name); ``details`` carries structured context for clients.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__
        self.details: dict[str, Any] = dict(details or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for an API error body."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StorefrontError):
    """Request data is well-formed but unusable (e.g. an unparseable price)."""


class IntegrityError(StorefrontError):
    """A write would break a uniqueness or reference rule; nothing was written."""


class AuthenticationError(StorefrontError):
    """A login attempt failed or was cancelled."""


class ExternalServiceError(StorefrontError):
    """A call to Discord (OAuth or webhook) failed."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service

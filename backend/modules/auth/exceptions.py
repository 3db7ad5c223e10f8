"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError


class ExternalExchangeError(ExternalServiceError):
    """Raised when a call to Discord (token exchange, profile, guild join) fails."""

    def __init__(
        self,
        message: str,
        step: str,
        status_code: Optional[int] = None,
    ):
        details: dict = {"step": step}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message,
            service="discord_oauth",
            code="EXTERNAL_EXCHANGE_FAILURE",
            details=details,
        )
        self.step = step
        self.status_code = status_code


class LoginFailedError(AuthenticationError):
    """
    Raised when a login attempt fails.

    The message is safe to show to the user. The previous session is
    left as it was.
    """

    def __init__(self, message: str = "Failed to complete login. Please try again.", reason: str = "unknown"):
        super().__init__(
            message,
            code="LOGIN_FAILED",
            details={"reason": reason},
        )
        self.reason = reason

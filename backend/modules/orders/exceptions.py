"""
Orders module exceptions.

These exceptions are raised by the orders module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ValidationError


class InvalidPriceError(ValidationError):
    """Raised when a plan or add-on price string cannot be parsed."""

    def __init__(self, value: str):
        super().__init__(
            f"Invalid price: {value!r}",
            code="INVALID_PRICE",
            details={"value": value},
        )


class NotificationDeliveryError(ExternalServiceError):
    """
    Raised when the order notification sink is unreachable or rejects a message.

    Checkout catches and logs this: the stored order is the source of truth,
    the notification is best-effort.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="order_webhook",
            code="NOTIFICATION_DELIVERY_FAILURE",
            details={"status_code": status_code} if status_code is not None else {},
        )
        self.status_code = status_code

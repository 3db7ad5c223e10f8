"""
Orders module interfaces.

Other modules should depend on these protocols, not the concrete
implementations.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.auth.models import AuthSession
from modules.store.models import Order, OrderStatus

from .models import CheckoutRequest, CheckoutResult, OrderSummary, PriceBreakdown


@runtime_checkable
class IOrderNotifier(Protocol):
    """Outbound order notification sink."""

    @property
    def is_configured(self) -> bool:
        """Whether the sink has somewhere to deliver to."""
        ...

    async def send_order(self, summary: OrderSummary) -> bool:
        """
        Deliver an order summary.

        Returns:
            True if delivered, False if skipped because unconfigured

        Raises:
            NotificationDeliveryError: If delivery failed
        """
        ...


@runtime_checkable
class IOrderService(Protocol):
    """
    Interface for order operations.

    Checkout is the only asynchronous operation; lookups and confirmation
    go straight to the store.
    """

    def quote(self, request: CheckoutRequest) -> PriceBreakdown:
        """Price a checkout request without side effects."""
        ...

    async def checkout(self, request: CheckoutRequest, session: AuthSession) -> CheckoutResult:
        """
        Submit an order.

        Raises:
            IntegrityError: If the order cannot be stored (nothing is written)
        """
        ...

    def find_order(self, reference: str) -> Optional[Order]:
        """Find an order by order code or internal ID."""
        ...

    def confirm_order(self, order_code: str) -> bool:
        """Confirm a pending order. False if unknown or already confirmed."""
        ...

    def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
    ) -> list[Order]:
        """List orders, optionally filtered."""
        ...

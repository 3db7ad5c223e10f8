"""
Orders module.

Pricing, checkout and the order lifecycle on top of the store.

Public API:
- IOrderService: Interface for checkout and admin order operations
- IOrderNotifier: Interface for the staff notification sink
- can_transition, generate_order_code: Lifecycle rules
- Plan, AddonSelection, CheckoutRequest, CheckoutResult: Checkout models
- Order exceptions: InvalidPriceError, NotificationDeliveryError
"""

from .interfaces import IOrderNotifier, IOrderService
from .lifecycle import ALLOWED_TRANSITIONS, can_transition, generate_order_code
from .models import (
    AddonPricing,
    AddonSelection,
    CheckoutRequest,
    CheckoutResult,
    OrderSummary,
    Plan,
    PriceBreakdown,
)
from .exceptions import InvalidPriceError, NotificationDeliveryError

__all__ = [
    # Interfaces
    "IOrderNotifier",
    "IOrderService",
    # Lifecycle
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "generate_order_code",
    # Models
    "AddonPricing",
    "AddonSelection",
    "CheckoutRequest",
    "CheckoutResult",
    "OrderSummary",
    "Plan",
    "PriceBreakdown",
    # Exceptions
    "InvalidPriceError",
    "NotificationDeliveryError",
]

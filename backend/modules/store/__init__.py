"""
Store module.

Persistent storage for users, orders and coupons, with the uniqueness
and reference rules the rest of the backend relies on.

Public API:
- IStore: Interface for store operations
- User, Order, Coupon: Persisted records
- OrderDraft, CustomerInfo: Inputs for order creation
- Store exceptions: DuplicateEntityError, UnknownReferenceError
"""

from .interfaces import IStore
from .models import (
    User,
    Order,
    OrderDraft,
    OrderStatus,
    CustomerInfo,
    Coupon,
    DiscountType,
    MembershipType,
    normalize_coupon_code,
)
from .exceptions import DuplicateEntityError, UnknownReferenceError

__all__ = [
    # Interface
    "IStore",
    # Models
    "User",
    "Order",
    "OrderDraft",
    "OrderStatus",
    "CustomerInfo",
    "Coupon",
    "DiscountType",
    "MembershipType",
    "normalize_coupon_code",
    # Exceptions
    "DuplicateEntityError",
    "UnknownReferenceError",
]

"""
Store module data models.

These models define the persisted entities (users, orders, coupons)
and the drafts other modules pass in to create them. All persisted
records are immutable; updates produce a new record via model_copy.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MembershipType(str, Enum):
    """User membership tiers."""

    NORMAL = "normal"
    PREMIUM = "premium"


class OrderStatus(str, Enum):
    """Order states. The only transition is PENDING -> CONFIRMED."""

    PENDING = "pending"
    CONFIRMED = "confirmed"


class DiscountType(str, Enum):
    """How a coupon reduces the total."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_coupon_code(code: str) -> str:
    """Coupon codes are case-insensitive; the canonical form is upper-case."""
    return code.strip().upper()


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class User(BaseModel):
    """
    A storefront customer, created on first Discord login.

    ``discord_id`` is unique across the collection.
    """

    id: str = Field(..., description="Internal user ID (UUID)")
    discord_id: str = Field(..., description="Discord user ID")
    username: str = Field(..., description="Discord username")
    global_name: Optional[str] = Field(None, description="Discord display name")
    email: Optional[str] = Field(None, description="Email from Discord")
    avatar: Optional[str] = Field(None, description="Discord avatar hash")
    membership_type: MembershipType = Field(
        default=MembershipType.NORMAL,
        description="Membership tier",
    )
    created_at: datetime = Field(..., description="First login time")
    last_seen: Optional[datetime] = Field(None, description="Most recent login time")

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("created_at", "last_seen")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class CustomerInfo(BaseModel):
    """Checkout form snapshot stored with the order."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    discord_username: str = ""
    server_name: str = ""

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class OrderDraft(BaseModel):
    """
    Everything needed to create an order.

    ``order_code`` may be reserved by the caller (checkout shows it to the
    customer before the order is stored); otherwise the store generates one.
    """

    user_id: str = Field(..., description="Owning user's internal ID")
    plan_name: str = Field(..., description="Plan display name")
    price: str = Field(..., description="Display price, e.g. '₹500/mo'")
    total: Optional[int] = Field(None, ge=0, description="Total in currency units")
    type: str = Field(default="minecraft", description="Product family")
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)
    coupon_code: Optional[str] = Field(None, description="Redeemed coupon, if any")
    order_code: Optional[str] = Field(None, description="Pre-reserved order code")


class Order(BaseModel):
    """
    A stored order.

    ``order_code`` is the customer-facing reference and is unique;
    ``id`` is internal. ``user_id`` is a lookup reference only.
    """

    id: str = Field(..., description="Internal order ID (UUID)")
    order_code: str = Field(..., description="Customer-facing order code")
    user_id: str = Field(..., description="Owning user's internal ID")
    type: str = Field(default="minecraft", description="Product family")
    plan_name: str = Field(..., description="Plan display name")
    price: str = Field(..., description="Display price")
    total: Optional[int] = Field(None, description="Total in currency units")
    status: OrderStatus = Field(default=OrderStatus.PENDING)
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)
    coupon_code: Optional[str] = None
    created_at: datetime = Field(..., description="Creation time")
    confirmed_at: Optional[datetime] = Field(None, description="Confirmation time")

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("created_at", "confirmed_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class Coupon(BaseModel):
    """
    A discount coupon.

    Valid while not expired and while usage_count < usage_limit
    (when a limit is set). Only redemption mutates it.
    """

    code: str = Field(..., min_length=1, description="Coupon code (upper-case)")
    discount_type: DiscountType = Field(..., description="Percentage or fixed amount")
    discount_value: Decimal = Field(..., ge=0, description="Percent or currency units")
    expires_at: Optional[datetime] = Field(None, description="Expiry time")
    usage_limit: Optional[int] = Field(None, ge=0, description="Max redemptions")
    usage_count: int = Field(default=0, ge=0, description="Redemptions so far")
    created_at: Optional[datetime] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        code = normalize_coupon_code(value)
        if not code:
            raise ValueError("Coupon code must not be blank")
        return code

    @field_validator("expires_at", "created_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

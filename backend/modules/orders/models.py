"""
Orders module data models.

Plans and add-ons as the storefront presents them, pricing breakdowns,
and the checkout request/result pair.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from modules.store.models import CustomerInfo, Order


class AddonPricing(BaseModel):
    """Per-item add-on prices as display strings (e.g. '₹50')."""

    unit: str = Field(default="₹0", description="Price per extra unit")
    backup: str = Field(default="₹0", description="Price per backup slot")


class Plan(BaseModel):
    """
    A hosting plan as selected in the storefront.

    Prices are display strings such as '₹1,200/month'; the pricing module
    parses them.
    """

    name: str = Field(..., min_length=1, description="Plan name, e.g. 'Budget'")
    price: str = Field(..., description="Monthly price display string")
    plan_type: Optional[str] = Field(None, description="budget / powered / premium")
    ram: Optional[str] = None
    cpu: Optional[str] = None
    storage: Optional[str] = None
    location: Optional[str] = None
    addons: AddonPricing = Field(default_factory=AddonPricing)


class AddonSelection(BaseModel):
    """How many of each add-on the customer picked."""

    units: int = Field(default=0, ge=0, description="Extra units")
    backups: int = Field(default=0, ge=0, description="Backup slots")


class PriceBreakdown(BaseModel):
    """Monthly price of a plan plus add-ons, before and after a coupon."""

    base_price: int = Field(..., ge=0)
    units_price: int = Field(default=0, ge=0)
    backups_price: int = Field(default=0, ge=0)
    subtotal: int = Field(..., ge=0)
    discount: int = Field(default=0, ge=0)
    total: int = Field(..., ge=0)
    coupon_code: Optional[str] = Field(None, description="Coupon applied, if any")
    coupon_label: Optional[str] = Field(None, description="e.g. '10%' or '₹150'")

    @property
    def addons_price(self) -> int:
        return self.units_price + self.backups_price


class CheckoutRequest(BaseModel):
    """Checkout form submission."""

    plan: Plan
    addons: AddonSelection = Field(default_factory=AddonSelection)
    customer: CustomerInfo = Field(default_factory=CustomerInfo)
    coupon_code: Optional[str] = Field(None, description="Coupon entered by the customer")


class OrderSummary(BaseModel):
    """What the order notification carries."""

    order_code: str
    customer: CustomerInfo
    plan: Plan
    addons: AddonSelection
    breakdown: PriceBreakdown
    created_at: datetime


class CheckoutResult(BaseModel):
    """
    Outcome of a checkout.

    ``stored`` is False for guests (no stored user to own the order);
    ``notified`` is False when the notification could not be delivered.
    Neither makes the checkout fail.
    """

    order_code: str
    price: str = Field(..., description="Display price, e.g. '₹900/mo'")
    breakdown: PriceBreakdown
    stored: bool = False
    notified: bool = False
    coupon_redeemed: bool = False
    order: Optional[Order] = None

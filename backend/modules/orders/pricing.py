"""
Plan pricing.

Storefront prices arrive as display strings ('₹1,200/month'). This module
parses them, adds up plan and add-ons, and applies an optional coupon.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from modules.coupons.validator import apply_discount, describe_discount
from modules.store.models import Coupon

from .exceptions import InvalidPriceError
from .models import AddonSelection, Plan, PriceBreakdown

_NON_NUMERIC = re.compile(r"[^\d.]")


def parse_price(value: Union[str, int]) -> int:
    """
    Parse a display price into whole currency units.

    Everything after the first '/' (the billing period) is ignored, as are
    currency symbols, thousands separators and whitespace. Fractions are
    truncated.

    Examples:
        '₹1,200/month' -> 1200
        '₹50' -> 50
    """
    if isinstance(value, int):
        if value < 0:
            raise InvalidPriceError(str(value))
        return value

    amount = _NON_NUMERIC.sub("", value.split("/")[0])
    if not amount:
        raise InvalidPriceError(value)
    try:
        return int(Decimal(amount))
    except InvalidOperation:
        raise InvalidPriceError(value)


def format_price(amount: int, currency_symbol: str = "₹", period: Optional[str] = "mo") -> str:
    """Format a total for display, e.g. 900 -> '₹900/mo'."""
    text = f"{currency_symbol}{amount}"
    return f"{text}/{period}" if period else text


def calculate_breakdown(
    plan: Plan,
    addons: AddonSelection,
    coupon: Optional[Coupon] = None,
    currency_symbol: str = "₹",
) -> PriceBreakdown:
    """
    Price a plan with add-ons and an optional coupon.

    The coupon applies to the whole subtotal (plan plus add-ons).
    """
    base_price = parse_price(plan.price)
    units_price = addons.units * parse_price(plan.addons.unit)
    backups_price = addons.backups * parse_price(plan.addons.backup)
    subtotal = base_price + units_price + backups_price

    total = apply_discount(subtotal, coupon)

    return PriceBreakdown(
        base_price=base_price,
        units_price=units_price,
        backups_price=backups_price,
        subtotal=subtotal,
        discount=subtotal - total,
        total=total,
        coupon_code=coupon.code if coupon else None,
        coupon_label=describe_discount(coupon, currency_symbol) if coupon else None,
    )

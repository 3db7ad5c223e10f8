"""
Coupon rules.

Pure functions over a coupon record and the current time. Nothing here
touches the store, so the rules can be tested and reused in isolation.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from modules.store.models import Coupon, DiscountType, ensure_utc

Number = Union[int, Decimal]


def is_coupon_valid(coupon: Coupon, now: Optional[datetime] = None) -> bool:
    """
    Check whether a coupon can be redeemed at ``now``.

    A coupon is valid when it has not expired (``now`` strictly before
    ``expires_at``) and, if it has a usage limit, has been used fewer
    times than the limit.

    Args:
        coupon: Coupon to check
        now: Time of the check (defaults to the current UTC time)

    Returns:
        True if the coupon is valid
    """
    now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)

    if coupon.expires_at is not None and not now < coupon.expires_at:
        return False

    if coupon.usage_limit is not None and coupon.usage_count >= coupon.usage_limit:
        return False

    return True


def round_currency(amount: Decimal) -> int:
    """Round half-up to whole currency units."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def discount_amount(total: Number, coupon: Coupon) -> Decimal:
    """Amount a coupon takes off ``total``, never more than the total itself."""
    total = Decimal(total)
    if coupon.discount_type == DiscountType.PERCENTAGE:
        amount = total * coupon.discount_value / Decimal(100)
    else:
        amount = coupon.discount_value
    return min(max(amount, Decimal(0)), max(total, Decimal(0)))


def apply_discount(total: Number, coupon: Optional[Coupon]) -> int:
    """
    Apply a coupon to a total.

    Percentage coupons take ``total * value / 100`` off; fixed coupons take
    ``value`` off. The result is floored at zero and rounded to whole
    currency units.

    Examples:
        10% of 1000 -> 900
        fixed 1500 on 1000 -> 0
    """
    total = Decimal(total)
    if coupon is None:
        return round_currency(max(total, Decimal(0)))
    return round_currency(total - discount_amount(total, coupon))


def describe_discount(coupon: Coupon, currency_symbol: str = "₹") -> str:
    """Short label for a coupon's discount, e.g. '10%' or '₹150'."""
    value = coupon.discount_value.normalize()
    # normalize() turns 100 into 1E+2
    text = format(value, "f")
    if coupon.discount_type == DiscountType.PERCENTAGE:
        return f"{text}%"
    return f"{currency_symbol}{text}"

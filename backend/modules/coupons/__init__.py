"""
Coupons module.

Pure coupon rules: validity over time and usage, and discount arithmetic.
Coupon storage and redemption live in the store module.

Public API:
- is_coupon_valid: Validity check for a coupon at a point in time
- apply_discount: Discounted, rounded total
- describe_discount: Display label for a coupon's discount
"""

from .validator import (
    is_coupon_valid,
    apply_discount,
    discount_amount,
    describe_discount,
    round_currency,
)

__all__ = [
    "is_coupon_valid",
    "apply_discount",
    "discount_amount",
    "describe_discount",
    "round_currency",
]

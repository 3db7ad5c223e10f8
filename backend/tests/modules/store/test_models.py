"""Tests for store models."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pydantic import ValidationError

from modules.store.models import (
    Coupon,
    CustomerInfo,
    DiscountType,
    OrderDraft,
    ensure_utc,
    normalize_coupon_code,
)


class TestCouponCode:
    def test_normalize(self):
        """Codes are trimmed and upper-cased."""
        assert normalize_coupon_code("  summer10 ") == "SUMMER10"

    def test_coupon_normalizes_on_construction(self):
        """Coupon.code is always canonical."""
        coupon = Coupon(code="Summer10", discount_type=DiscountType.PERCENTAGE, discount_value=10)
        assert coupon.code == "SUMMER10"

    def test_blank_code_rejected(self):
        """A code of only spaces is not a code."""
        with pytest.raises(ValidationError):
            Coupon(code="   ", discount_type=DiscountType.FIXED, discount_value=1)

    def test_negative_values_rejected(self):
        """Discounts, limits and counts cannot be negative."""
        with pytest.raises(ValidationError):
            Coupon(code="X", discount_type=DiscountType.FIXED, discount_value=-1)
        with pytest.raises(ValidationError):
            Coupon(code="X", discount_type=DiscountType.FIXED, discount_value=1, usage_limit=-1)

    def test_naive_expiry_is_utc(self):
        """Naive expiry times are read as UTC."""
        coupon = Coupon(
            code="X",
            discount_type=DiscountType.FIXED,
            discount_value=Decimal("1"),
            expires_at=datetime(2025, 1, 1),
        )
        assert coupon.expires_at == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestEnsureUtc:
    def test_none_passes_through(self):
        assert ensure_utc(None) is None

    def test_aware_is_unchanged(self):
        value = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert ensure_utc(value) is value


class TestCustomerInfo:
    def test_full_name(self):
        """full_name joins first and last name."""
        assert CustomerInfo(first_name="Steve", last_name="Builder").full_name == "Steve Builder"

    def test_full_name_partial(self):
        """Missing parts do not leave stray spaces."""
        assert CustomerInfo(first_name="Steve").full_name == "Steve"
        assert CustomerInfo().full_name == ""


class TestOrderDraft:
    def test_defaults(self):
        """Drafts default to a Minecraft order with no coupon or code."""
        draft = OrderDraft(user_id="u1", plan_name="Budget", price="500")
        assert draft.type == "minecraft"
        assert draft.coupon_code is None
        assert draft.order_code is None

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError):
            OrderDraft(user_id="u1", plan_name="Budget", price="500", total=-1)

"""
Order API endpoints.

Customer-facing: coupon check, price quote, checkout.
Admin-facing: order search and confirmation.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.dependencies import get_container, get_order_service, get_session_manager, get_store
from modules.auth.session import AuthSessionManager
from modules.coupons.validator import describe_discount
from modules.store.interfaces import IStore
from modules.store.models import DiscountType, Order, OrderStatus

from .interfaces import IOrderService
from .models import CheckoutRequest, CheckoutResult, PriceBreakdown

router = APIRouter()
admin_router = APIRouter()


class CouponValidationRequest(BaseModel):
    """Coupon code as typed by the customer."""

    code: str = Field(..., description="Coupon code (any case)")


class CouponValidationResponse(BaseModel):
    """A valid coupon's terms."""

    code: str
    discount_type: DiscountType
    discount_value: Decimal
    label: str


class ConfirmOrderResponse(BaseModel):
    """Result of a confirmation attempt."""

    order_code: str
    confirmed: bool
    status: OrderStatus


@router.post("/coupons/validate", response_model=CouponValidationResponse)
def validate_coupon(
    request: CouponValidationRequest,
    store: IStore = Depends(get_store),
) -> CouponValidationResponse:
    """
    Check a coupon code.

    Unknown and expired/used-up coupons are both reported as 404.
    """
    coupon = store.validate_coupon(request.code)
    if coupon is None:
        raise HTTPException(status_code=404, detail="Invalid or expired coupon code")
    return CouponValidationResponse(
        code=coupon.code,
        discount_type=coupon.discount_type,
        discount_value=coupon.discount_value,
        label=describe_discount(coupon, get_container().settings.currency_symbol),
    )


@router.post("/checkout/quote", response_model=PriceBreakdown)
def quote_checkout(
    request: CheckoutRequest,
    service: IOrderService = Depends(get_order_service),
) -> PriceBreakdown:
    """Price a plan with add-ons and an optional coupon."""
    return service.quote(request)


@router.post("/checkout", response_model=CheckoutResult)
async def checkout(
    request: CheckoutRequest,
    service: IOrderService = Depends(get_order_service),
    session: AuthSessionManager = Depends(get_session_manager),
) -> CheckoutResult:
    """
    Submit an order.

    Succeeds even if the staff notification could not be delivered.
    """
    return await service.checkout(request, session.get_state())


@admin_router.get("", response_model=list[Order])
def list_orders(
    status: Optional[OrderStatus] = Query(default=None, description="Filter by status"),
    user_id: Optional[str] = Query(default=None, description="Filter by owner"),
    service: IOrderService = Depends(get_order_service),
) -> list[Order]:
    """List orders, oldest first."""
    return service.list_orders(status=status, user_id=user_id)


@admin_router.get("/{reference}", response_model=Order)
def get_order(
    reference: str,
    service: IOrderService = Depends(get_order_service),
) -> Order:
    """Find an order by order code or internal ID."""
    order = service.find_order(reference)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@admin_router.post("/{order_code}/confirm", response_model=ConfirmOrderResponse)
def confirm_order(
    order_code: str,
    service: IOrderService = Depends(get_order_service),
) -> ConfirmOrderResponse:
    """
    Confirm a pending order.

    Confirming an already-confirmed order is not an error: ``confirmed``
    is simply false.
    """
    order = service.find_order(order_code)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")

    confirmed = service.confirm_order(order.order_code)
    return ConfirmOrderResponse(
        order_code=order.order_code,
        confirmed=confirmed,
        status=OrderStatus.CONFIRMED if confirmed else order.status,
    )

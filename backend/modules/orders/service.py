"""
Order service implementation.

Runs the checkout flow: price the order, reserve an order code, wait out
the processing delay, store the order, redeem the coupon, and notify staff.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from modules.auth.models import AuthSession
from modules.store.interfaces import IStore
from modules.store.models import (
    Coupon,
    CustomerInfo,
    Order,
    OrderDraft,
    OrderStatus,
)

from .exceptions import NotificationDeliveryError
from .interfaces import IOrderNotifier, IOrderService
from .lifecycle import generate_order_code
from .models import (
    CheckoutRequest,
    CheckoutResult,
    OrderSummary,
    PriceBreakdown,
)
from .pricing import calculate_breakdown, format_price

logger = logging.getLogger(__name__)


class OrderService(IOrderService):
    """
    Implementation of the order service.

    Side effects of a checkout (order stored, coupon redeemed, staff
    notified) run to completion whether or not the caller is still
    waiting for the result.
    """

    # Attempts at reserving an unused order code
    MAX_CODE_ATTEMPTS = 10

    def __init__(
        self,
        store: IStore,
        notifier: IOrderNotifier,
        processing_delay: float = 2.0,
        order_code_prefix: str = "MC",
        currency_symbol: str = "₹",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._store = store
        self._notifier = notifier
        self._processing_delay = processing_delay
        self._order_code_prefix = order_code_prefix
        self._currency_symbol = currency_symbol
        self._sleep = sleep

    def _resolve_coupon(self, code: Optional[str]) -> Optional[Coupon]:
        if not code or not code.strip():
            return None
        coupon = self._store.validate_coupon(code)
        if coupon is None:
            logger.warning(f"Coupon {code.strip().upper()!r} is no longer valid; pricing without it")
        return coupon

    def quote(self, request: CheckoutRequest) -> PriceBreakdown:
        """Price a request; an invalid coupon is dropped, not an error."""
        coupon = self._resolve_coupon(request.coupon_code)
        return calculate_breakdown(
            request.plan, request.addons, coupon, self._currency_symbol
        )

    def _reserve_order_code(self) -> str:
        for _ in range(self.MAX_CODE_ATTEMPTS):
            code = generate_order_code(self._order_code_prefix)
            if self._store.get_order(code) is None:
                return code
        # Let the store report the clash as a DuplicateEntityError
        return code

    @staticmethod
    def _customer_for_session(customer: CustomerInfo, session: AuthSession) -> CustomerInfo:
        """Logged-in customers cannot override their Discord username or email."""
        if not session.is_authenticated or session.user is None:
            return customer
        return customer.model_copy(
            update={
                "email": session.user.email or customer.email,
                "discord_username": session.user.username,
            }
        )

    async def checkout(self, request: CheckoutRequest, session: AuthSession) -> CheckoutResult:
        """
        Submit an order.

        Guests get an order code and a notification but no stored order.
        An integrity failure while storing aborts before the coupon is
        redeemed. A failed notification is logged and ignored.
        """
        breakdown = self.quote(request)
        customer = self._customer_for_session(request.customer, session)
        order_code = self._reserve_order_code()
        price = format_price(breakdown.total, self._currency_symbol)

        logger.info(f"Processing checkout {order_code} for plan {request.plan.name}")
        await self._sleep(self._processing_delay)

        order: Optional[Order] = None
        if session.is_authenticated and session.user is not None:
            user = self._store.get_user_by_discord_id(session.user.id)
            if user is None:
                logger.warning(
                    f"No stored user for discord_id {session.user.id}; order {order_code} not stored"
                )
            else:
                order = self._store.create_order(
                    OrderDraft(
                        user_id=user.id,
                        plan_name=request.plan.name,
                        price=price,
                        total=breakdown.total,
                        customer_info=customer,
                        coupon_code=breakdown.coupon_code,
                        order_code=order_code,
                    )
                )

        coupon_redeemed = False
        if breakdown.coupon_code:
            coupon_redeemed = self._store.use_coupon(breakdown.coupon_code)

        summary = OrderSummary(
            order_code=order_code,
            customer=customer,
            plan=request.plan,
            addons=request.addons,
            breakdown=breakdown,
            created_at=order.created_at if order else datetime.now(timezone.utc),
        )

        notified = False
        try:
            notified = await self._notifier.send_order(summary)
        except NotificationDeliveryError as e:
            logger.warning(f"Order notification for {order_code} failed: {e.message}")

        return CheckoutResult(
            order_code=order_code,
            price=price,
            breakdown=breakdown,
            stored=order is not None,
            notified=notified,
            coupon_redeemed=coupon_redeemed,
            order=order,
        )

    def find_order(self, reference: str) -> Optional[Order]:
        if not reference or not reference.strip():
            return None
        return self._store.get_order(reference)

    def confirm_order(self, order_code: str) -> bool:
        return self._store.confirm_order(order_code)

    def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
    ) -> list[Order]:
        if user_id is not None:
            orders = self._store.get_orders_for_user(user_id)
        else:
            orders = self._store.get_all_orders()
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders

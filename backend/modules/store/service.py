"""
Persistent store implementation.

Keeps users, orders and coupons in storage-backed collections and
maintains the lookup indices (Discord ID -> user, order code -> order).
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.models import DiscordProfile
from shared.storage import KeyValueStorage
from modules.coupons.validator import is_coupon_valid
from modules.orders.lifecycle import can_transition, generate_order_code

from .interfaces import IStore
from .models import (
    Coupon,
    MembershipType,
    Order,
    OrderDraft,
    OrderStatus,
    User,
    normalize_coupon_code,
)
from .exceptions import DuplicateEntityError, UnknownReferenceError
from .repository import CouponRepository, OrderRepository, UserRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PersistentStore(IStore):
    """
    Implementation of the persistent store.

    Construct one per process and share it. Every public operation runs
    under a single re-entrant lock, so a read never interleaves with a
    write even when the API serves requests from a thread pool.
    """

    # Attempts at generating an unused order code before giving up
    MAX_ORDER_CODE_ATTEMPTS = 10

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] = utc_now,
        order_code_prefix: str = "MC",
        code_factory: Optional[Callable[[], str]] = None,
    ):
        self._lock = threading.RLock()
        self._clock = clock
        self._code_factory = code_factory or (lambda: generate_order_code(order_code_prefix))

        self._users = UserRepository(storage)
        self._orders = OrderRepository(storage)
        self._coupons = CouponRepository(storage)

        self._user_ids_by_discord_id: dict[str, str] = {}
        self._order_ids_by_code: dict[str, str] = {}
        self._rebuild_indices()

    def _rebuild_indices(self) -> None:
        for user in sorted(self._users.all(), key=lambda u: (u.created_at, u.id)):
            if user.discord_id in self._user_ids_by_discord_id:
                logger.warning(
                    f"Duplicate discord_id {user.discord_id} in stored users; keeping the oldest"
                )
                continue
            self._user_ids_by_discord_id[user.discord_id] = user.id

        for order in sorted(self._orders.all(), key=lambda o: (o.created_at, o.id)):
            if order.order_code in self._order_ids_by_code:
                logger.warning(
                    f"Duplicate order code {order.order_code} in stored orders; keeping the oldest"
                )
                continue
            self._order_ids_by_code[order.order_code] = order.id

        logger.debug(
            f"Loaded {len(self._users)} users, {len(self._orders)} orders, "
            f"{len(self._coupons)} coupons"
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def create_user(self, profile: DiscordProfile) -> User:
        """Insert a new user; the Discord ID must not be taken."""
        with self._lock:
            if profile.id in self._user_ids_by_discord_id:
                raise DuplicateEntityError("User", "discord_id", profile.id)

            now = self._clock()
            user = User(
                id=str(uuid.uuid4()),
                discord_id=profile.id,
                username=profile.username,
                global_name=profile.global_name,
                email=profile.email,
                avatar=profile.avatar,
                membership_type=MembershipType.NORMAL,
                created_at=now,
                last_seen=now,
            )
            self._users.put(user)
            self._user_ids_by_discord_id[user.discord_id] = user.id

        logger.info(f"Created user {user.id} for discord_id {user.discord_id}")
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_discord_id(self, discord_id: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_ids_by_discord_id.get(discord_id)
            if user_id is None:
                return None
            return self._users.get(user_id)

    def record_login(self, profile: DiscordProfile) -> User:
        """
        Register a login.

        First login creates the user; later logins refresh last_seen and
        the profile fields Discord may have changed.
        """
        with self._lock:
            existing = self.get_user_by_discord_id(profile.id)
            if existing is None:
                return self.create_user(profile)

            updated = existing.model_copy(
                update={
                    "username": profile.username,
                    "global_name": profile.global_name,
                    "email": profile.email,
                    "avatar": profile.avatar,
                    "last_seen": self._clock(),
                }
            )
            return self._users.put(updated)

    def set_membership_type(
        self, user_id: str, membership_type: MembershipType
    ) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if user.membership_type == membership_type:
                return user
            updated = self._users.put(
                user.model_copy(update={"membership_type": membership_type})
            )

        logger.info(f"User {user_id} membership set to {membership_type.value}")
        return updated

    def get_all_users(self) -> list[User]:
        with self._lock:
            return sorted(self._users.all(), key=lambda u: (u.created_at, u.id))

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    def _new_order_code(self) -> str:
        code = ""
        for _ in range(self.MAX_ORDER_CODE_ATTEMPTS):
            code = self._code_factory()
            if code not in self._order_ids_by_code:
                return code
            logger.warning(f"Generated order code {code} is taken; retrying")
        raise DuplicateEntityError("Order", "order_code", code)

    def create_order(self, draft: OrderDraft) -> Order:
        """
        Store a new pending order for an existing user.

        A pre-reserved code that is already taken is an error; a generated
        code is regenerated until it is free.
        """
        with self._lock:
            if not self._users.contains(draft.user_id):
                raise UnknownReferenceError("Order", "user_id", draft.user_id)

            if draft.order_code:
                order_code = draft.order_code.strip()
                if order_code in self._order_ids_by_code:
                    raise DuplicateEntityError("Order", "order_code", order_code)
            else:
                order_code = self._new_order_code()

            order = Order(
                id=str(uuid.uuid4()),
                order_code=order_code,
                user_id=draft.user_id,
                type=draft.type,
                plan_name=draft.plan_name,
                price=draft.price,
                total=draft.total,
                status=OrderStatus.PENDING,
                customer_info=draft.customer_info,
                coupon_code=draft.coupon_code,
                created_at=self._clock(),
            )
            self._orders.put(order)
            self._order_ids_by_code[order.order_code] = order.id

        logger.info(f"Created order {order.order_code} for user {order.user_id}")
        return order

    def _get_order_by_code(self, order_code: str) -> Optional[Order]:
        order_id = self._order_ids_by_code.get(order_code)
        if order_id is None:
            return None
        return self._orders.get(order_id)

    def get_order(self, reference: str) -> Optional[Order]:
        reference = reference.strip()
        with self._lock:
            return self._get_order_by_code(reference) or self._orders.get(reference)

    def get_orders_for_user(self, user_id: str) -> list[Order]:
        with self._lock:
            orders = [o for o in self._orders.all() if o.user_id == user_id]
        return sorted(orders, key=lambda o: (o.created_at, o.id))

    def confirm_order(self, order_code: str) -> bool:
        with self._lock:
            order = self._get_order_by_code(order_code.strip())
            if order is None:
                logger.info(f"Cannot confirm unknown order {order_code}")
                return False
            if not can_transition(order.status, OrderStatus.CONFIRMED):
                logger.info(f"Order {order_code} is already {order.status.value}")
                return False

            self._orders.put(
                order.model_copy(
                    update={"status": OrderStatus.CONFIRMED, "confirmed_at": self._clock()}
                )
            )

        logger.info(f"Confirmed order {order_code}")
        return True

    def get_all_orders(self) -> list[Order]:
        with self._lock:
            return sorted(self._orders.all(), key=lambda o: (o.created_at, o.id))

    # -------------------------------------------------------------------------
    # Coupons
    # -------------------------------------------------------------------------

    def add_coupon(self, coupon: Coupon) -> Coupon:
        with self._lock:
            if self._coupons.contains(coupon.code):
                raise DuplicateEntityError("Coupon", "code", coupon.code)
            if coupon.created_at is None:
                coupon = coupon.model_copy(update={"created_at": self._clock()})
            self._coupons.put(coupon)

        logger.info(f"Added coupon {coupon.code}")
        return coupon

    def get_all_coupons(self) -> list[Coupon]:
        with self._lock:
            return sorted(self._coupons.all(), key=lambda c: c.code)

    def validate_coupon(self, code: str) -> Optional[Coupon]:
        """Pure read: the coupon if it exists and is valid right now."""
        normalized = normalize_coupon_code(code)
        if not normalized:
            return None
        with self._lock:
            coupon = self._coupons.get(normalized)
            if coupon is None or not is_coupon_valid(coupon, self._clock()):
                return None
            return coupon

    def use_coupon(self, code: str) -> bool:
        """
        Redeem a coupon once.

        Re-validates first, so repeated calls never push usage past the
        limit; an invalid coupon is a no-op rather than an error.
        """
        with self._lock:
            coupon = self.validate_coupon(code)
            if coupon is None:
                logger.info(f"Coupon {normalize_coupon_code(code)!r} not redeemable; skipping")
                return False
            self._coupons.put(coupon.model_copy(update={"usage_count": coupon.usage_count + 1}))

        logger.info(f"Redeemed coupon {coupon.code} ({coupon.usage_count + 1} uses)")
        return True

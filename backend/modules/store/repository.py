"""
Collection repositories for the store.

One repository per persisted collection. The store service owns the
indices and the integrity rules; repositories only load and save.
"""

from shared.repository import BaseRepository

from .models import Coupon, Order, User

USERS_KEY = "users"
ORDERS_KEY = "orders"
COUPONS_KEY = "coupons"


class UserRepository(BaseRepository[User]):
    """Users keyed by internal ID."""

    storage_key = USERS_KEY
    model = User

    @staticmethod
    def key_of(user: User) -> str:
        return user.id


class OrderRepository(BaseRepository[Order]):
    """Orders keyed by internal ID."""

    storage_key = ORDERS_KEY
    model = Order

    @staticmethod
    def key_of(order: Order) -> str:
        return order.id


class CouponRepository(BaseRepository[Coupon]):
    """Coupons keyed by normalized code."""

    storage_key = COUPONS_KEY
    model = Coupon

    @staticmethod
    def key_of(coupon: Coupon) -> str:
        return coupon.code

"""
Store module interface.

Other modules should depend on IStore, not the concrete implementation.
This enables testing with fakes and swapping the storage backend.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import DiscordProfile

from .models import Coupon, MembershipType, Order, OrderDraft, User


@runtime_checkable
class IStore(Protocol):
    """
    Interface for the persistent store.

    All operations are synchronous and complete before returning.
    Absent records are reported as None/False; integrity violations raise.
    """

    # Users

    def create_user(self, profile: DiscordProfile) -> User:
        """
        Insert a new user for a Discord profile.

        Raises:
            DuplicateEntityError: If a user with this Discord ID exists
        """
        ...

    def get_user(self, user_id: str) -> Optional[User]:
        """Get a user by internal ID, or None."""
        ...

    def get_user_by_discord_id(self, discord_id: str) -> Optional[User]:
        """Get a user by Discord ID, or None."""
        ...

    def record_login(self, profile: DiscordProfile) -> User:
        """Create the user on first login, otherwise refresh last_seen and profile."""
        ...

    def set_membership_type(
        self, user_id: str, membership_type: MembershipType
    ) -> Optional[User]:
        """Change a user's tier. Returns None if the user is unknown."""
        ...

    def get_all_users(self) -> list[User]:
        """Snapshot of all users, oldest first."""
        ...

    # Orders

    def create_order(self, draft: OrderDraft) -> Order:
        """
        Store a new pending order.

        Raises:
            UnknownReferenceError: If draft.user_id does not resolve
            DuplicateEntityError: If draft.order_code is already taken
        """
        ...

    def get_order(self, reference: str) -> Optional[Order]:
        """Get an order by order code or internal ID, or None."""
        ...

    def get_orders_for_user(self, user_id: str) -> list[Order]:
        """Snapshot of a user's orders, oldest first."""
        ...

    def confirm_order(self, order_code: str) -> bool:
        """
        Move an order from pending to confirmed.

        Returns:
            True if the status changed, False if unknown or already confirmed
        """
        ...

    def get_all_orders(self) -> list[Order]:
        """Snapshot of all orders, oldest first."""
        ...

    # Coupons

    def add_coupon(self, coupon: Coupon) -> Coupon:
        """
        Store a new coupon.

        Raises:
            DuplicateEntityError: If the code already exists
        """
        ...

    def get_all_coupons(self) -> list[Coupon]:
        """Snapshot of all coupons, ordered by code."""
        ...

    def validate_coupon(self, code: str) -> Optional[Coupon]:
        """Return the coupon if it exists and is currently valid, else None."""
        ...

    def use_coupon(self, code: str) -> bool:
        """Redeem a coupon once if still valid. Returns whether it was redeemed."""
        ...

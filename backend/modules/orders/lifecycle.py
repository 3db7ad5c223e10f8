"""
Order state machine and order-code generation.

Orders have two states and one transition:

    pending --confirm--> confirmed

There is no way back and no cancelled state.
"""

import secrets
import string
import time
from typing import Optional

from modules.store.models import OrderStatus

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED}),
    OrderStatus.CONFIRMED: frozenset(),
}

ORDER_CODE_ALPHABET = string.digits + string.ascii_uppercase
ORDER_CODE_TIME_DIGITS = 6
ORDER_CODE_RANDOM_CHARS = 4


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Check whether an order in ``current`` may move to ``target``."""
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def generate_order_code(prefix: str = "MC", now_ms: Optional[int] = None) -> str:
    """
    Generate a customer-facing order code.

    Format: prefix + last 6 digits of the millisecond clock + 4 random
    base-36 characters, e.g. ``MC123456K3ZQ``. Codes made in the same
    millisecond differ in the random part; the store still rejects or
    regenerates on the rare clash.

    Args:
        prefix: Code prefix
        now_ms: Millisecond timestamp (defaults to the current time)

    Returns:
        The order code
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    time_part = str(now_ms)[-ORDER_CODE_TIME_DIGITS:].rjust(ORDER_CODE_TIME_DIGITS, "0")
    random_part = "".join(
        secrets.choice(ORDER_CODE_ALPHABET) for _ in range(ORDER_CODE_RANDOM_CHARS)
    )
    return f"{prefix}{time_part}{random_part}"

"""Read-only views over store snapshots for the admin screens."""

import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from .models import User

USER_EXPORT_HEADER = [
    "ID",
    "Discord ID",
    "Username",
    "Email",
    "Membership Type",
    "Created At",
    "Last Seen",
]


def filter_users(users: Iterable[User], search: Optional[str]) -> list[User]:
    """Users whose email or username contains ``search`` (case-insensitive)."""
    users = list(users)
    term = (search or "").strip().lower()
    if not term:
        return users
    return [
        u for u in users
        if term in (u.email or "").lower() or term in u.username.lower()
    ]


def _date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def export_users_csv(users: Iterable[User]) -> str:
    """Render users as CSV, one row per user, dates as yyyy-mm-dd."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(USER_EXPORT_HEADER)
    for user in users:
        writer.writerow([
            user.id,
            user.discord_id,
            user.username,
            user.email or "",
            user.membership_type.value,
            _date(user.created_at),
            _date(user.last_seen),
        ])
    return buffer.getvalue()

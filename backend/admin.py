"""
Vortex Cloud storefront admin tool.

Operates directly on the store the API server uses (same DATA_DIR), for
staff work that has no screen: confirming orders, adding coupons and
exporting the user list.

Usage:
    python admin.py users [--search TEXT]
    python admin.py orders [--status pending|confirmed]
    python admin.py confirm MC123456ABCD
    python admin.py add-coupon SUMMER10 --percent 10 --expires 2026-12-31 --limit 100
    python admin.py coupons
    python admin.py export-users users.csv
"""

import argparse
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from api.dependencies import ServiceContainer
from shared.exceptions import StorefrontError
from shared.logging_config import configure_logging
from modules.coupons.validator import describe_discount, is_coupon_valid
from modules.store.models import Coupon, DiscountType, OrderStatus
from modules.store.reports import export_users_csv, filter_users

console = Console()


def _date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def parse_expiry(value: str) -> datetime:
    """Parse YYYY-MM-DD (end of that day, UTC) or a full ISO timestamp."""
    try:
        if len(value) == 10:
            day = datetime.strptime(value, "%Y-%m-%d")
            return day.replace(hour=23, minute=59, second=59, tzinfo=timezone.utc)
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}")
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def list_users(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    users = filter_users(container.store.get_all_users(), args.search)

    table = Table(title=f"Users ({len(users)})")
    table.add_column("ID", style="dim")
    table.add_column("Discord ID")
    table.add_column("Username", style="bold")
    table.add_column("Email")
    table.add_column("Membership")
    table.add_column("Created")
    table.add_column("Last Seen")
    for user in users:
        table.add_row(
            user.id,
            user.discord_id,
            user.username,
            user.email or "-",
            user.membership_type.value,
            _date(user.created_at),
            _date(user.last_seen),
        )
    out.print(table)
    return 0


def list_orders(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    status = OrderStatus(args.status) if args.status else None
    orders = container.orders.list_orders(status=status, user_id=args.user)

    table = Table(title=f"Orders ({len(orders)})")
    table.add_column("Code", style="bold")
    table.add_column("Plan")
    table.add_column("Price")
    table.add_column("Customer")
    table.add_column("Server")
    table.add_column("Status")
    table.add_column("Created")
    for order in orders:
        status_style = "green" if order.status == OrderStatus.CONFIRMED else "yellow"
        table.add_row(
            order.order_code,
            order.plan_name,
            order.price,
            order.customer_info.full_name or order.customer_info.email or "-",
            order.customer_info.server_name or "-",
            f"[{status_style}]{order.status.value}[/{status_style}]",
            _date(order.created_at),
        )
    out.print(table)
    return 0


def confirm_order(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    order = container.orders.find_order(args.order_code)
    if order is None:
        out.print(f"[red]Error:[/red] Order not found: {args.order_code}")
        return 1

    if container.orders.confirm_order(order.order_code):
        out.print(f"[green]Confirmed[/green] {order.order_code}")
    else:
        out.print(f"[yellow]{order.order_code} is already {order.status.value}[/yellow]")
    return 0


def add_coupon(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    if args.percent is not None:
        discount_type, value = DiscountType.PERCENTAGE, args.percent
    else:
        discount_type, value = DiscountType.FIXED, args.fixed

    coupon = container.store.add_coupon(
        Coupon(
            code=args.code,
            discount_type=discount_type,
            discount_value=value,
            expires_at=args.expires,
            usage_limit=args.limit,
        )
    )
    label = describe_discount(coupon, container.settings.currency_symbol)
    out.print(f"[green]Saved coupon[/green] {coupon.code} ({label} off)")
    return 0


def list_coupons(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    coupons = container.store.get_all_coupons()
    symbol = container.settings.currency_symbol

    table = Table(title=f"Coupons ({len(coupons)})")
    table.add_column("Code", style="bold")
    table.add_column("Discount")
    table.add_column("Expires")
    table.add_column("Used")
    table.add_column("Valid")
    for coupon in coupons:
        limit = "∞" if coupon.usage_limit is None else str(coupon.usage_limit)
        valid = is_coupon_valid(coupon)
        table.add_row(
            coupon.code,
            describe_discount(coupon, symbol),
            _date(coupon.expires_at),
            f"{coupon.usage_count}/{limit}",
            "[green]yes[/green]" if valid else "[red]no[/red]",
        )
    out.print(table)
    return 0


def export_users(container: ServiceContainer, args: argparse.Namespace, out: Console) -> int:
    users = filter_users(container.store.get_all_users(), args.search)
    args.path.write_text(export_users_csv(users), encoding="utf-8")
    out.print(f"[green]Exported[/green] {len(users)} user(s) to {args.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vortex Cloud storefront admin tool")
    commands = parser.add_subparsers(dest="command", required=True)

    users = commands.add_parser("users", help="List users")
    users.add_argument("--search", "-s", help="Filter by email or username")
    users.set_defaults(handler=list_users)

    orders = commands.add_parser("orders", help="List orders")
    orders.add_argument("--status", choices=[s.value for s in OrderStatus])
    orders.add_argument("--user", help="Only orders owned by this user ID")
    orders.set_defaults(handler=list_orders)

    confirm = commands.add_parser("confirm", help="Confirm a pending order")
    confirm.add_argument("order_code", help="Order code (or internal order ID)")
    confirm.set_defaults(handler=confirm_order)

    coupon = commands.add_parser("add-coupon", help="Add a coupon")
    coupon.add_argument("code", help="Coupon code (stored upper-case)")
    discount = coupon.add_mutually_exclusive_group(required=True)
    discount.add_argument("--percent", type=Decimal, help="Percentage off")
    discount.add_argument("--fixed", type=Decimal, help="Fixed amount off")
    coupon.add_argument("--expires", type=parse_expiry, help="YYYY-MM-DD or ISO timestamp")
    coupon.add_argument("--limit", type=int, help="Maximum number of redemptions")
    coupon.set_defaults(handler=add_coupon)

    coupons = commands.add_parser("coupons", help="List coupons")
    coupons.set_defaults(handler=list_coupons)

    export = commands.add_parser("export-users", help="Export users as CSV")
    export.add_argument("path", type=Path, help="Output file")
    export.add_argument("--search", "-s", help="Filter by email or username")
    export.set_defaults(handler=export_users)

    return parser


def main(
    argv: Optional[list[str]] = None,
    container: Optional[ServiceContainer] = None,
    out: Console = console,
) -> int:
    """Run one admin command. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    container = container or ServiceContainer()
    configure_logging(container.settings)

    try:
        return args.handler(container, args, out)
    except StorefrontError as e:
        out.print(f"[red]Error:[/red] {e.message}")
        return 1
    except PydanticValidationError as e:
        for error in e.errors():
            out.print(f"[red]Error:[/red] {error['msg']}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

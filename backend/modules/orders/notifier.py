"""
Order notification sink.

New orders are announced to staff through a Discord webhook. Delivery is
best-effort: the notifier raises NotificationDeliveryError and the checkout
flow decides to log and carry on.
"""

import logging
from typing import Any, Optional

import httpx

from .exceptions import NotificationDeliveryError
from .models import OrderSummary
from .pricing import format_price

logger = logging.getLogger(__name__)

EMBED_COLOR = 0x7C3AED
EMBED_TITLE = "🎮 New Minecraft Hosting Order!"
EMBED_FOOTER = "Vortex Cloud ™ Minecraft Hosting"


def build_order_embed(summary: OrderSummary, currency_symbol: str = "₹") -> dict[str, Any]:
    """Build the Discord webhook payload for an order."""
    customer = summary.customer
    plan = summary.plan
    breakdown = summary.breakdown

    pricing_lines = [
        f"**Base Price:** {format_price(breakdown.base_price, currency_symbol, 'month')}",
        f"**Add-ons:** {format_price(breakdown.addons_price, currency_symbol, None)}",
    ]
    if breakdown.coupon_code:
        pricing_lines.append(
            f"**Coupon:** {breakdown.coupon_code} (-{breakdown.coupon_label})"
        )
    pricing_lines.append(f"**Total:** {format_price(breakdown.total, currency_symbol, 'month')}")

    return {
        "embeds": [
            {
                "title": EMBED_TITLE,
                "color": EMBED_COLOR,
                "fields": [
                    {
                        "name": "🆔 Order ID",
                        "value": f"**{summary.order_code}**",
                        "inline": False,
                    },
                    {
                        "name": "👤 Customer Information",
                        "value": (
                            f"**Name:** {customer.full_name}\n"
                            f"**Email:** {customer.email}\n"
                            f"**Discord:** {customer.discord_username}"
                        ),
                        "inline": False,
                    },
                    {
                        "name": "🎯 Plan Details",
                        "value": (
                            f"**Plan:** {plan.name} Plan\n"
                            f"**Type:** {plan.plan_type or 'Standard'}\n"
                            f"**RAM:** {plan.ram or '-'}\n"
                            f"**CPU:** {plan.cpu or '-'}\n"
                            f"**Storage:** {plan.storage or '-'}\n"
                            f"**Location:** {plan.location or '-'}"
                        ),
                        "inline": True,
                    },
                    {
                        "name": "🔧 Add-ons",
                        "value": (
                            f"**Extra Units:** {summary.addons.units}\n"
                            f"**Backup Slots:** {summary.addons.backups}"
                        ),
                        "inline": True,
                    },
                    {
                        "name": "💰 Pricing",
                        "value": "\n".join(pricing_lines),
                        "inline": True,
                    },
                    {
                        "name": "🎮 Server Details",
                        "value": f"**Server Name:** {customer.server_name or 'Not specified'}",
                        "inline": False,
                    },
                ],
                "timestamp": summary.created_at.isoformat(),
                "footer": {"text": EMBED_FOOTER},
            }
        ]
    }


class DiscordWebhookNotifier:
    """
    Posts order summaries to a Discord webhook.

    With no webhook URL configured, send_order logs and returns False.
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        timeout: float = 30.0,
        currency_symbol: str = "₹",
    ):
        self._webhook_url = webhook_url or ""
        self._timeout = timeout
        self._currency_symbol = currency_symbol

    @property
    def is_configured(self) -> bool:
        return bool(self._webhook_url)

    async def send_order(self, summary: OrderSummary) -> bool:
        """
        Deliver an order summary.

        Returns:
            True if delivered, False if no webhook is configured

        Raises:
            NotificationDeliveryError: On transport errors or a non-2xx reply
        """
        if not self.is_configured:
            logger.debug(f"Order webhook not configured, skipping notification for {summary.order_code}")
            return False

        payload = build_order_embed(summary, self._currency_symbol)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationDeliveryError(
                f"Order webhook rejected notification: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NotificationDeliveryError(f"Order webhook unreachable: {e}") from e

        logger.info(f"Sent order notification for {summary.order_code}")
        return True

"""Tests for the Discord webhook order notifier."""

import httpx
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from modules.orders.exceptions import NotificationDeliveryError
from modules.orders.models import (
    AddonSelection,
    OrderSummary,
    Plan,
    PriceBreakdown,
)
from modules.orders.notifier import (
    EMBED_COLOR,
    EMBED_FOOTER,
    DiscordWebhookNotifier,
    build_order_embed,
)
from modules.store.models import CustomerInfo

WEBHOOK_URL = "https://discord.com/api/webhooks/1/abc"


@pytest.fixture
def summary() -> OrderSummary:
    return OrderSummary(
        order_code="MC123456ABCD",
        customer=CustomerInfo(
            first_name="Steve",
            last_name="Builder",
            email="steve@example.com",
            discord_username="steve",
            server_name="Blocktopia",
        ),
        plan=Plan(name="Budget", price="₹1,000/month", plan_type="budget", ram="4GB"),
        addons=AddonSelection(units=2, backups=1),
        breakdown=PriceBreakdown(
            base_price=1000,
            units_price=100,
            backups_price=25,
            subtotal=1125,
            discount=113,
            total=1012,
            coupon_code="SAVE10",
            coupon_label="10%",
        ),
        created_at=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


def _mock_client(response=None, error=None):
    client = AsyncMock()
    if error is not None:
        client.post.side_effect = error
    else:
        client.post.return_value = response
    return client


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", WEBHOOK_URL))


class TestBuildOrderEmbed:
    def test_embed_shape(self, summary):
        payload = build_order_embed(summary)
        embed = payload["embeds"][0]

        assert embed["color"] == EMBED_COLOR
        assert embed["footer"] == {"text": EMBED_FOOTER}
        assert embed["timestamp"] == "2025-01-01T12:00:00+00:00"
        assert [f["name"] for f in embed["fields"]] == [
            "🆔 Order ID",
            "👤 Customer Information",
            "🎯 Plan Details",
            "🔧 Add-ons",
            "💰 Pricing",
            "🎮 Server Details",
        ]

    def test_carries_order_fields(self, summary):
        fields = {f["name"]: f["value"] for f in build_order_embed(summary)["embeds"][0]["fields"]}

        assert "MC123456ABCD" in fields["🆔 Order ID"]
        assert "Steve Builder" in fields["👤 Customer Information"]
        assert "steve@example.com" in fields["👤 Customer Information"]
        assert "Budget Plan" in fields["🎯 Plan Details"]
        assert "**Extra Units:** 2" in fields["🔧 Add-ons"]
        assert "**Backup Slots:** 1" in fields["🔧 Add-ons"]
        assert "**Coupon:** SAVE10 (-10%)" in fields["💰 Pricing"]
        assert "**Total:** ₹1012/month" in fields["💰 Pricing"]
        assert "Blocktopia" in fields["🎮 Server Details"]

    def test_no_coupon_line_without_coupon(self, summary):
        breakdown = summary.breakdown.model_copy(
            update={"coupon_code": None, "coupon_label": None, "discount": 0, "total": 1125}
        )
        payload = build_order_embed(summary.model_copy(update={"breakdown": breakdown}), "$")
        pricing = payload["embeds"][0]["fields"][4]["value"]

        assert "Coupon" not in pricing
        assert "**Total:** $1125/month" in pricing

    def test_missing_server_name(self, summary):
        customer = summary.customer.model_copy(update={"server_name": ""})
        payload = build_order_embed(summary.model_copy(update={"customer": customer}))
        assert payload["embeds"][0]["fields"][5]["value"] == "**Server Name:** Not specified"


class TestDiscordWebhookNotifier:
    @pytest.mark.asyncio
    async def test_unconfigured_skips(self, summary):
        """Without a webhook URL nothing is sent."""
        notifier = DiscordWebhookNotifier(webhook_url="")
        assert notifier.is_configured is False

        with patch("httpx.AsyncClient") as mock_client_class:
            assert await notifier.send_order(summary) is False
        mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_posts_embed(self, summary):
        client = _mock_client(response=_response(204))
        notifier = DiscordWebhookNotifier(webhook_url=WEBHOOK_URL, timeout=5.0)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value.__aenter__.return_value = client
            mock_client_class.return_value.__aexit__.return_value = None

            assert await notifier.send_order(summary) is True

        mock_client_class.assert_called_once_with(timeout=5.0)
        client.post.assert_awaited_once_with(WEBHOOK_URL, json=build_order_embed(summary))

    @pytest.mark.asyncio
    async def test_rejected_raises_delivery_error(self, summary):
        client = _mock_client(response=_response(500))
        notifier = DiscordWebhookNotifier(webhook_url=WEBHOOK_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value.__aenter__.return_value = client
            mock_client_class.return_value.__aexit__.return_value = None

            with pytest.raises(NotificationDeliveryError) as exc_info:
                await notifier.send_order(summary)

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "NOTIFICATION_DELIVERY_FAILURE"
        assert exc_info.value.details["service"] == "order_webhook"

    @pytest.mark.asyncio
    async def test_unreachable_raises_delivery_error(self, summary):
        client = _mock_client(error=httpx.ConnectError("connection refused"))
        notifier = DiscordWebhookNotifier(webhook_url=WEBHOOK_URL)

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value.__aenter__.return_value = client
            mock_client_class.return_value.__aexit__.return_value = None

            with pytest.raises(NotificationDeliveryError) as exc_info:
                await notifier.send_order(summary)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_webhook_url_raises_delivery_error(self, summary):
        """A webhook URL httpx cannot parse is a delivery failure, not a crash."""
        client = _mock_client(error=httpx.InvalidURL("Invalid non-printable ASCII character in URL"))
        notifier = DiscordWebhookNotifier(webhook_url="http://hooks\x00.example/")

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value.__aenter__.return_value = client
            mock_client_class.return_value.__aexit__.return_value = None

            with pytest.raises(NotificationDeliveryError) as exc_info:
                await notifier.send_order(summary)

        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

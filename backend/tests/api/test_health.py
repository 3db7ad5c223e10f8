"""Tests for health check endpoints."""

from modules.store.models import Coupon, DiscountType


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_check(self, client):
        """Readiness endpoint should report storage and collection counts."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["storage"] == "memory"
        assert data["notifications"] == "disabled"
        assert (data["users"], data["orders"], data["coupons"]) == (0, 0, 0)

    def test_readiness_counts(self, client, container, logged_in):
        """Counts should reflect the store."""
        container.store.add_coupon(
            Coupon(code="SAVE10", discount_type=DiscountType.PERCENTAGE, discount_value=10)
        )
        data = client.get("/api/ready").json()
        assert data["users"] == 1
        assert data["coupons"] == 1

    def test_readiness_response_structure(self, client):
        """Readiness response should have correct structure."""
        data = client.get("/api/ready").json()
        assert set(data.keys()) == {
            "status", "storage", "users", "orders", "coupons", "notifications"
        }

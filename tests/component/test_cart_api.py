"""
Component tests for the cart endpoints.

These tests go through the whole stack:
- API endpoints (FastAPI routes, X-Session-Id header)
- CartService (merge / quantity rules)
- CartRepo + ProductRepo (SQLite)
- LockService (fakeredis)
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


def session_headers(session_id="sess-1"):
    return {"X-Session-Id": session_id}


class TestAddToCart:
    """POST /api/cart"""

    def test_add_product_returns_created_line_with_product(self, test_client: TestClient, make_product):
        # Arrange
        bear = make_product(name="Cuddly Bear", price="24.99")

        # Act
        response = test_client.post(
            "/api/cart",
            json={"productId": bear.id, "quantity": 2},
            headers=session_headers(),
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["productId"] == bear.id
        assert data["quantity"] == 2
        assert data["sessionId"] == "sess-1"
        assert data["product"]["name"] == "Cuddly Bear"
        assert Decimal(data["product"]["price"]) == Decimal("24.99")

    def test_second_add_merges_quantity(self, test_client: TestClient, make_product):
        bear = make_product()

        first = test_client.post("/api/cart", json={"productId": bear.id, "quantity": 1}, headers=session_headers())
        second = test_client.post("/api/cart", json={"productId": bear.id, "quantity": 4}, headers=session_headers())

        assert second.status_code == 201
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["quantity"] == 5

        lines = test_client.get("/api/cart", headers=session_headers()).json()
        assert len(lines) == 1

    def test_snake_case_body_is_accepted(self, test_client: TestClient, make_product):
        bear = make_product()

        response = test_client.post(
            "/api/cart", json={"product_id": bear.id, "quantity": 1}, headers=session_headers()
        )

        assert response.status_code == 201

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_invalid_quantity_returns_400(self, test_client: TestClient, make_product, quantity):
        bear = make_product()

        response = test_client.post(
            "/api/cart", json={"productId": bear.id, "quantity": quantity}, headers=session_headers()
        )

        assert response.status_code == 400
        assert test_client.get("/api/cart", headers=session_headers()).json() == []

    def test_out_of_range_quantity_returns_400(self, test_client: TestClient, make_product):
        bear = make_product()

        response = test_client.post(
            "/api/cart", json={"productId": bear.id, "quantity": 2**40}, headers=session_headers()
        )

        assert response.status_code == 400
        assert test_client.get("/api/cart", headers=session_headers()).json() == []

    def test_unknown_product_returns_400(self, test_client: TestClient):
        response = test_client.post(
            "/api/cart", json={"productId": 404, "quantity": 1}, headers=session_headers()
        )

        assert response.status_code == 400
        assert "404" in response.json()["detail"]

    def test_malformed_body_returns_400(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"quantity": "lots"}, headers=session_headers())

        assert response.status_code == 400

    def test_busy_session_returns_409(self, test_client: TestClient, lock_service, make_product):
        bear = make_product()
        lock_service.wait_seconds = 0.1
        lock_service.acquire_session_lock("sess-1", "someone-else", 30)

        response = test_client.post(
            "/api/cart", json={"productId": bear.id, "quantity": 1}, headers=session_headers()
        )

        assert response.status_code == 409


class TestReadCart:
    """GET /api/cart, GET /api/cart/total"""

    def test_unknown_session_has_empty_cart(self, test_client: TestClient):
        response = test_client.get("/api/cart", headers=session_headers("fresh"))

        assert response.status_code == 200
        assert response.json() == []

    def test_missing_session_header_is_rejected(self, test_client: TestClient):
        response = test_client.get("/api/cart")

        assert response.status_code == 400

    def test_sessions_do_not_see_each_other(self, test_client: TestClient, make_product):
        bear = make_product()
        test_client.post("/api/cart", json={"productId": bear.id, "quantity": 1}, headers=session_headers("a"))

        assert test_client.get("/api/cart", headers=session_headers("b")).json() == []

    def test_total_uses_current_prices(self, test_client: TestClient, make_product):
        bear = make_product(price="5.00")
        blocks = make_product(price="3.50")
        test_client.post("/api/cart", json={"productId": bear.id, "quantity": 2}, headers=session_headers())
        test_client.post("/api/cart", json={"productId": blocks.id, "quantity": 1}, headers=session_headers())

        response = test_client.get("/api/cart/total", headers=session_headers())

        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("13.50")


class TestUpdateAndRemove:
    """PUT /api/cart/{id}, DELETE /api/cart/{id}, DELETE /api/cart"""

    @pytest.fixture
    def line_id(self, test_client: TestClient, make_product):
        bear = make_product()
        response = test_client.post(
            "/api/cart", json={"productId": bear.id, "quantity": 2}, headers=session_headers()
        )
        return response.json()["id"]

    def test_update_quantity(self, test_client: TestClient, line_id):
        response = test_client.put(f"/api/cart/{line_id}", json={"quantity": 6}, headers=session_headers())

        assert response.status_code == 200
        assert response.json()["quantity"] == 6

    def test_update_to_zero_returns_400(self, test_client: TestClient, line_id):
        response = test_client.put(f"/api/cart/{line_id}", json={"quantity": 0}, headers=session_headers())

        assert response.status_code == 400

    def test_update_unknown_line_returns_404(self, test_client: TestClient):
        response = test_client.put("/api/cart/9999", json={"quantity": 1}, headers=session_headers())

        assert response.status_code == 404

    def test_update_from_other_session_returns_404(self, test_client: TestClient, line_id):
        response = test_client.put(
            f"/api/cart/{line_id}", json={"quantity": 1}, headers=session_headers("intruder")
        )

        assert response.status_code == 404

    def test_remove_line(self, test_client: TestClient, line_id):
        response = test_client.delete(f"/api/cart/{line_id}", headers=session_headers())

        assert response.status_code == 200
        assert response.json() == {"removed": True}
        assert test_client.get("/api/cart", headers=session_headers()).json() == []

    def test_remove_twice_returns_404(self, test_client: TestClient, line_id):
        test_client.delete(f"/api/cart/{line_id}", headers=session_headers())

        response = test_client.delete(f"/api/cart/{line_id}", headers=session_headers())

        assert response.status_code == 404

    def test_clear_cart(self, test_client: TestClient, line_id):
        response = test_client.delete("/api/cart", headers=session_headers())

        assert response.status_code == 200
        assert response.json() == {"removed": 1}
        assert test_client.get("/api/cart", headers=session_headers()).json() == []

    def test_clear_empty_cart_succeeds(self, test_client: TestClient):
        response = test_client.delete("/api/cart", headers=session_headers("empty"))

        assert response.status_code == 200
        assert response.json() == {"removed": 0}

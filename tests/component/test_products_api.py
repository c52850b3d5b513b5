"""
Component tests for the catalog endpoints and the health check.
"""
from decimal import Decimal

from fastapi.testclient import TestClient

ADMIN = {"X-User-Id": "1", "X-User-Role": "admin"}
CUSTOMER = {"X-User-Id": "7", "X-User-Role": "customer"}

NEW_TOY = {
    "name": "Wooden Train",
    "description": "Six wagons and a loco",
    "price": "19.99",
    "inventory": 12,
    "section": "retail",
    "isNew": True,
}


class TestHealth:

    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestListProducts:
    """GET /api/products"""

    def test_filter_by_section(self, test_client: TestClient, make_product):
        # Arrange
        bear = make_product(name="Bear", section="retail")
        make_product(name="Bear x12", section="wholesale")

        # Act
        response = test_client.get("/api/products", params={"section": "retail"})

        # Assert
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [bear.id]

    def test_inactive_products_are_hidden(self, test_client: TestClient, make_product):
        bear = make_product(name="Bear")
        make_product(name="Retired", is_active=False)

        response = test_client.get("/api/products")

        assert [p["name"] for p in response.json()] == [bear.name]

    def test_unknown_section_returns_400(self, test_client: TestClient):
        response = test_client.get("/api/products", params={"section": "outlet"})

        assert response.status_code == 400

    def test_get_missing_product_returns_404(self, test_client: TestClient):
        response = test_client.get("/api/products/31337")

        assert response.status_code == 404


class TestManageProducts:
    """POST / PUT / DELETE /api/products"""

    def test_admin_creates_product(self, test_client: TestClient):
        response = test_client.post("/api/products", json=NEW_TOY, headers=ADMIN)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Wooden Train"
        assert Decimal(data["price"]) == Decimal("19.99")
        assert data["isNew"] is True
        assert data["isActive"] is True

    def test_customer_cannot_create_product(self, test_client: TestClient):
        response = test_client.post("/api/products", json=NEW_TOY, headers=CUSTOMER)

        assert response.status_code == 403

    def test_anonymous_cannot_create_product(self, test_client: TestClient):
        response = test_client.post("/api/products", json=NEW_TOY)

        assert response.status_code == 401

    def test_negative_price_returns_400(self, test_client: TestClient):
        response = test_client.post("/api/products", json={**NEW_TOY, "price": "-1.00"}, headers=ADMIN)

        assert response.status_code == 400

    def test_partial_update_keeps_other_fields(self, test_client: TestClient, make_product):
        bear = make_product(name="Bear", price="10.00")

        response = test_client.put(f"/api/products/{bear.id}", json={"price": "12.50"}, headers=ADMIN)

        assert response.status_code == 200
        assert Decimal(response.json()["price"]) == Decimal("12.50")
        assert response.json()["name"] == "Bear"

    def test_update_missing_product_returns_404(self, test_client: TestClient):
        response = test_client.put("/api/products/999", json={"price": "1.00"}, headers=ADMIN)

        assert response.status_code == 404

    def test_delete_deactivates_product(self, test_client: TestClient, make_product):
        bear = make_product()

        response = test_client.delete(f"/api/products/{bear.id}", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert test_client.get("/api/products").json() == []
        assert test_client.get(f"/api/products/{bear.id}").json()["isActive"] is False

    def test_deleted_product_cannot_be_added_to_cart(self, test_client: TestClient, make_product):
        bear = make_product()
        test_client.delete(f"/api/products/{bear.id}", headers=ADMIN)

        response = test_client.post(
            "/api/cart", json={"productId": bear.id, "quantity": 1}, headers={"X-Session-Id": "s"}
        )

        assert response.status_code == 400

"""Unit tests for menu API endpoints."""
import pytest


class TestMenuAPI:
    """Test menu API endpoints."""

    def test_get_menu_success(self, test_client):
        """Test GET /api/menu returns full menu."""
        response = test_client.get("/api/menu")

        assert response.status_code == 200
        data = response.json()
        assert isinstance(data, list)
        assert [item["id"] for item in data] == [1, 2, 3, 7]

    def test_menu_item_fields(self, test_client):
        """Test that items use camelCase keys and numeric prices."""
        response = test_client.get("/api/menu")

        item = response.json()[0]
        assert item["name"] == "Margherita Pizza"
        assert item["price"] == 12.99
        assert item["category"] == "Pizza"
        assert item["imageUrl"] == "/images/margherita.jpg"
        assert "createdAt" in item

    def test_get_menu_item(self, test_client):
        response = test_client.get("/api/menu/7")

        assert response.status_code == 200
        assert response.json()["name"] == "Coca Cola"

    def test_get_menu_item_not_found(self, test_client):
        """Test GET with non-existent item returns 404."""
        response = test_client.get("/api/menu/999")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()

    @pytest.mark.parametrize("label", ["pizza", "PIZZA", "Pizza"])
    def test_get_menu_by_category(self, test_client, label):
        response = test_client.get(f"/api/menu/category/{label}")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [1, 2]

    def test_get_menu_by_unknown_category(self, test_client):
        response = test_client.get("/api/menu/category/Sushi")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_categories(self, test_client):
        response = test_client.get("/api/menu/categories")

        assert response.status_code == 200
        assert response.json() == ["Drinks", "Pizza", "Salads"]

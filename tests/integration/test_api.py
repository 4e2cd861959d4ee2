import json
import re

from foodapp.core.errors import ServiceUnavailable
from foodapp.llm.validate import MENU_ITEM_FIELDS, RESTAURANT_FIELDS
from foodapp.services.catalog import FallbackCatalog

catalog = FallbackCatalog()


class TestRestaurantsEndpoint:
    """Integration tests for GET /restaurants"""

    def test_fallback_without_ai(self, fallback_client):
        response = fallback_client.get("/restaurants")
        assert response.status_code == 200
        data = response.json()
        assert "error" not in data
        assert len(data["restaurants"]) == 6
        assert all(r["image"].startswith("https://picsum.photos/seed/") for r in data["restaurants"])

    def test_generation_failure_returns_payload_and_error(self, client_with_generator, fake_generator):
        client = client_with_generator(fake_generator(error=ServiceUnavailable("Gemini request failed: 503")))
        response = client.get("/restaurants")
        assert response.status_code == 500
        data = response.json()
        assert data["error"]
        assert data["restaurants"]
        for restaurant in data["restaurants"]:
            for field in RESTAURANT_FIELDS:
                assert field in restaurant

    def test_generated_restaurants(self, client_with_generator, fake_generator):
        payload = {"restaurants": [
            {"id": "a", "name": "Casa", "category": "墨西哥料理", "rating": 4.1, "reviews": 3,
             "deliveryTime": "15-25 分鐘", "minOrder": 90, "imageSearchQuery": "street tacos"},
        ]}
        client = client_with_generator(fake_generator("Sure!\n" + json.dumps(payload) + "\nEnjoy."))
        response = client.get("/restaurants")
        assert response.status_code == 200
        assert response.json()["restaurants"][0]["image"] == "https://picsum.photos/seed/street%20tacos/500/300"

    def test_wrong_method(self, fallback_client):
        response = fallback_client.post("/restaurants")
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}


class TestMenuEndpoint:
    """Integration tests for GET /menu"""

    def test_missing_category(self, fallback_client):
        response = fallback_client.get("/menu", params={"restaurantName": "熾熱鐵板燒"})
        assert response.status_code == 400
        data = response.json()
        assert "error" in data
        assert "menu" not in data

    def test_missing_restaurant_name(self, fallback_client):
        response = fallback_client.get("/menu", params={"category": "中式料理"})
        assert response.status_code == 400

    def test_empty_params_rejected(self, fallback_client):
        response = fallback_client.get("/menu", params={"restaurantName": "", "category": ""})
        assert response.status_code == 400

    def test_fallback_menu(self, fallback_client):
        response = fallback_client.get("/menu", params={"restaurantName": "京都花開壽司", "category": "日式料理 & 壽司"})
        assert response.status_code == 200
        menu = response.json()["menu"]
        assert len(menu) == 6
        assert menu == catalog.menu("日式料理 & 壽司", "京都花開壽司")

    def test_unknown_category_gets_default(self, fallback_client):
        response = fallback_client.get("/menu", params={"restaurantName": "X", "category": "火星料理"})
        assert response.status_code == 200
        assert response.json()["menu"] == catalog.menu("現代美式料理", "X")

    def test_generation_failure(self, client_with_generator, fake_generator):
        client = client_with_generator(fake_generator("I can't do that"))
        response = client.get("/menu", params={"restaurantName": "X", "category": "中式料理"})
        assert response.status_code == 500
        data = response.json()
        assert data["error"]
        for item in data["menu"]:
            for field in MENU_ITEM_FIELDS:
                assert field in item

    def test_wrong_method(self, fallback_client):
        assert fallback_client.delete("/menu").status_code == 405


class TestOrderEndpoint:
    """Integration tests for POST /order"""

    def test_fallback_confirmation(self, fallback_client, sample_order):
        response = fallback_client.post("/order", json=sample_order)
        assert response.status_code == 200
        data = response.json()
        assert "error" not in data
        assert re.fullmatch(r"ORD-\d{6}", data["orderNumber"])
        assert data["estimatedDeliveryTime"] == "20-30 分鐘"

    def test_missing_cart(self, fallback_client, sample_order):
        response = fallback_client.post("/order", json={"orderDetails": sample_order["orderDetails"]})
        assert response.status_code == 400
        assert response.json() == {"error": "Order details and cart are required"}

    def test_missing_order_details(self, fallback_client, sample_order):
        response = fallback_client.post("/order", json={"cart": sample_order["cart"]})
        assert response.status_code == 400

    def test_missing_body(self, fallback_client):
        response = fallback_client.post("/order")
        assert response.status_code == 400
        assert "error" in response.json()

    def test_malformed_cart(self, fallback_client, sample_order):
        response = fallback_client.post("/order", json={**sample_order, "cart": [{"name": "薯條"}]})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_generation_failure(self, client_with_generator, fake_generator, sample_order):
        client = client_with_generator(fake_generator(error=RuntimeError("quota exceeded")))
        response = client.post("/order", json=sample_order)
        assert response.status_code == 500
        data = response.json()
        assert data["error"]
        assert re.fullmatch(r"ORD-\d{6}", data["orderNumber"])
        assert data["estimatedDeliveryTime"]

    def test_order_is_persisted(self, client_with_generator, fake_order_store, sample_order):
        store = fake_order_store()
        client = client_with_generator(None, order_store=store)
        response = client.post("/order", json=sample_order)
        assert response.status_code == 200
        assert store.orders[0].order_number == response.json()["orderNumber"]

    def test_wrong_method(self, fallback_client):
        assert fallback_client.get("/order").status_code == 405


class TestMockMode:
    def test_mock_generator_round_trip(self, settings_factory):
        from fastapi.testclient import TestClient
        from foodapp.main import create_app

        client = TestClient(create_app(settings_factory(USE_MOCK=True)))
        response = client.get("/restaurants")
        assert response.status_code == 200
        assert len(response.json()["restaurants"]) == 6


class TestHealthEndpoints:
    """Test health and utility endpoints"""

    def test_health_endpoint(self, fallback_client):
        response = fallback_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["ai_enabled"] is False

    def test_root_endpoint(self, fallback_client):
        response = fallback_client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "endpoints" in data

import pytest
from fastapi.testclient import TestClient

from foodapp.core import config
from foodapp.core.config import Settings
from foodapp.main import create_app
from foodapp.services.handlers import DeliveryService
from foodapp.services.sheets import SaveResult


class FakeGenerator:
    """Content generator double: returns canned text or raises."""

    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate(self, prompt, response_schema):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeOrderStore:
    def __init__(self, result: SaveResult = None):
        self.result = result or SaveResult(success=True, message="ok")
        self.orders = []

    async def save_order(self, order):
        self.orders.append(order)
        return self.result


def make_settings(**overrides) -> Settings:
    """Settings with every external service switched off unless overridden."""
    settings = Settings()
    settings.GEMINI_API_KEY = None
    settings.USE_MOCK = False
    settings.SHEETS_WEBHOOK_URL = None
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Keep the shared settings object free of developer environment values"""
    original = (config.settings.GEMINI_API_KEY, config.settings.USE_MOCK, config.settings.SHEETS_WEBHOOK_URL)
    config.settings.GEMINI_API_KEY = None
    config.settings.USE_MOCK = False
    config.settings.SHEETS_WEBHOOK_URL = None

    yield

    config.settings.GEMINI_API_KEY, config.settings.USE_MOCK, config.settings.SHEETS_WEBHOOK_URL = original


@pytest.fixture
def fake_generator():
    return FakeGenerator


@pytest.fixture
def fake_order_store():
    return FakeOrderStore


@pytest.fixture
def fallback_client():
    """Client for an app with no generative service configured"""
    return TestClient(create_app(make_settings()))


@pytest.fixture
def client_with_generator():
    """Build a client whose service uses the given generator"""
    def _build(generator, order_store=None):
        app = create_app(make_settings())
        app.state.service = DeliveryService(generator=generator, order_store=order_store)
        return TestClient(app)
    return _build


@pytest.fixture
def sample_order():
    return {
        "orderDetails": {
            "name": "王小明",
            "phone": "0912345678",
            "address": "台北市信義區市府路1號",
            "paymentMethod": "貨到付款",
            "notes": "不要香菜",
        },
        "cart": [
            {"id": "m1", "name": "經典漢堡", "price": 180, "restaurantName": "熾熱鐵板燒", "quantity": 2},
            {"id": "m3", "name": "薯條", "price": 80, "restaurantName": "熾熱鐵板燒", "quantity": 1},
        ],
    }


@pytest.fixture
def settings_factory():
    return make_settings

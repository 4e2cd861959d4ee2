import json
import logging
import re
from typing import Any, Dict, List, Optional, Protocol

from foodapp.core.errors import ServiceUnavailable

logger = logging.getLogger(__name__)

_JSON_ONLY = "請務必確保你的回覆只有一個符合下方 schema 的 JSON 物件，不要包含任何 markdown 標籤、註解或其他額外文字。"

RESTAURANTS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "restaurants": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING", "description": "餐廳的唯一識別碼。"},
                    "name": {"type": "STRING"},
                    "category": {"type": "STRING"},
                    "rating": {"type": "NUMBER"},
                    "reviews": {"type": "INTEGER"},
                    "deliveryTime": {"type": "STRING"},
                    "minOrder": {"type": "INTEGER"},
                    "imageSearchQuery": {"type": "STRING", "description": "一個簡短、描述性的英文圖片搜尋關鍵字"},
                },
                "required": ["id", "name", "category", "rating", "reviews",
                             "deliveryTime", "minOrder", "imageSearchQuery"],
            },
        },
    },
}

MENU_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "menu": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "name": {"type": "STRING"},
                    "price": {"type": "NUMBER"},
                    "restaurantName": {"type": "STRING", "description": "此品項所屬的餐廳名稱。"},
                },
                "required": ["id", "name", "price", "restaurantName"],
            },
        },
    },
}

ORDER_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "orderNumber": {"type": "STRING"},
        "estimatedDeliveryTime": {"type": "STRING"},
    },
    "required": ["orderNumber", "estimatedDeliveryTime"],
}


def restaurants_prompt() -> str:
    return (
        "請為一個美食外送 App 生成一個包含8家多樣化且吸引人的虛構餐廳列表。"
        "請以繁體中文提供詳細資訊，例如：唯一的ID、名稱、類別、評分(介於3.5到5.0之間)、評論數、外送時間預估、最低訂單金額。"
        "此外，為每家餐廳提供一個簡短、描述性的英文圖片搜尋關鍵字 (imageSearchQuery)，"
        "例如 'gourmet burger and fries' 或 'fresh sushi platter'。"
        f"{_JSON_ONLY}"
    )


# Reads the restaurant and category back out of a menu_prompt() text
MENU_PROMPT_PATTERN = re.compile(r"名為 \"(?P<restaurant>.*)\" 的「(?P<category>.*)」餐廳")


def menu_prompt(restaurant_name: str, category: str) -> str:
    return (
        f"請為一間名為 \"{restaurant_name}\" 的「{category}」餐廳，生成一份包含6個品項的真實菜單。"
        "對於每個品項，請提供唯一的 ID、名稱和價格。每個品項都應包含餐廳名稱以供參考。"
        f"{_JSON_ONLY}"
    )


def order_prompt(order_details: Dict[str, Any], cart: List[Dict[str, Any]]) -> str:
    items = ", ".join(f"{item['name']} x{item['quantity']}" for item in cart)
    return (
        "一位顧客下了一張美食外送訂單。\n"
        f"顧客資料: {json.dumps(order_details, ensure_ascii=False)}。\n"
        f"訂單品項: {items}。\n"
        "請根據這些資訊，生成一個唯一的訂單編號（格式：ORD-XXXXXX）和一個真實的預計送達時間（例如：25-35 分鐘）。"
        f"{_JSON_ONLY}"
    )


class ContentGenerator(Protocol):
    async def generate(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        """Return the raw text the generative service produced for the prompt."""
        ...


class GeminiContentGenerator:
    """Single-shot Gemini call. Any failure surfaces as ServiceUnavailable; no retries."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        if not api_key:
            raise ValueError("GEMINI_API_KEY not set")
        self.api_key = api_key
        self.model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            try:
                import google.generativeai as genai  # lazy import to allow tests without package
            except ImportError as e:
                raise ServiceUnavailable("google-generativeai package is required to use Gemini client") from e

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def generate(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        model = self._get_model()
        try:
            response = await model.generate_content_async(
                prompt,
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": response_schema,
                },
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise ServiceUnavailable(f"Gemini request failed: {e}") from e

        if not text:
            raise ServiceUnavailable("Empty response from Gemini")
        return text


class MockContentGenerator:
    """Offline stand-in for development: catalog data wrapped the way models tend to answer."""

    def __init__(self, catalog=None):
        if catalog is None:
            from foodapp.services.catalog import FallbackCatalog
            catalog = FallbackCatalog()
        self.catalog = catalog

    async def generate(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        properties = response_schema.get("properties", {})
        if "restaurants" in properties:
            restaurants = [
                {k: v for k, v in r.items() if k != "image"}
                for r in self.catalog.restaurants()
            ]
            payload: Dict[str, Any] = {"restaurants": restaurants}
        elif "menu" in properties:
            match = MENU_PROMPT_PATTERN.search(prompt)
            if match:
                restaurant, category = match.group("restaurant"), match.group("category")
            else:
                restaurant, category = "Mock Restaurant", ""
            payload = {"menu": self.catalog.menu(category, restaurant)}
        else:
            payload = self.catalog.order_confirmation()

        body = json.dumps(payload, ensure_ascii=False, indent=2)
        return f"以下是您要求的資料：\n```json\n{body}\n```"


def build_generator(settings) -> Optional[ContentGenerator]:
    """Pick the generator for the configured environment, or None when generation is off."""
    if settings.USE_MOCK:
        logger.info("USE_MOCK enabled, using mock content generator")
        return MockContentGenerator()
    if settings.GEMINI_API_KEY:
        return GeminiContentGenerator(settings.GEMINI_API_KEY, settings.GEMINI_MODEL)
    logger.warning("Gemini API key is not configured. The app will rely on fallback data.")
    return None

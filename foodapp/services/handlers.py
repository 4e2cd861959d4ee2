"""
Endpoint orchestration: try the generative service, validate what comes back,
and fall back to the static catalog on any failure.

Every result carries a renderable body. A failed generation still answers with
fallback data, plus an "error" message and status 500.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from foodapp.core.errors import GenerationError, ServiceUnavailable
from foodapp.llm import client as llm_client
from foodapp.llm.client import ContentGenerator
from foodapp.llm.extract import extract_json
from foodapp.llm.validate import ResponseKind, validate
from foodapp.schemas import CartItem, ConfirmedOrder, OrderDetails
from foodapp.services.catalog import FallbackCatalog, with_image
from foodapp.services.sheets import SheetsOrderStore

logger = logging.getLogger(__name__)


@dataclass
class Generated:
    value: Any


@dataclass
class Failed:
    error: GenerationError


Outcome = Union[Generated, Failed]


@dataclass
class HandlerResult:
    status_code: int
    body: Dict[str, Any]


class DeliveryService:
    def __init__(
        self,
        generator: Optional[ContentGenerator],
        catalog: Optional[FallbackCatalog] = None,
        order_store: Optional[SheetsOrderStore] = None,
        delivery_fee: float = 0,
    ):
        self.generator = generator
        self.catalog = catalog or FallbackCatalog()
        self.order_store = order_store
        self.delivery_fee = delivery_fee

    async def _attempt(self, kind: ResponseKind, prompt: str, schema: Dict[str, Any]) -> Outcome:
        try:
            text = await self.generator.generate(prompt, schema)
            return Generated(validate(extract_json(text), kind))
        except GenerationError as e:
            return Failed(e)
        except Exception as e:
            logger.exception("Unexpected error from content generator")
            return Failed(ServiceUnavailable(f"AI service error: {e}"))

    async def restaurants(self) -> HandlerResult:
        if self.generator is None:
            logger.warning("AI service not available. Using fallback restaurant data.")
            return HandlerResult(200, {"restaurants": self.catalog.restaurants()})

        outcome = await self._attempt(
            ResponseKind.RESTAURANTS, llm_client.restaurants_prompt(), llm_client.RESTAURANTS_SCHEMA
        )
        if isinstance(outcome, Failed):
            logger.error("獲取餐廳資料時發生錯誤: %s", outcome.error.message)
            return HandlerResult(500, {
                "error": outcome.error.message,
                "restaurants": self.catalog.restaurants(),
            })
        return HandlerResult(200, {"restaurants": [with_image(r) for r in outcome.value]})

    async def menu(self, restaurant_name: str, category: str) -> HandlerResult:
        if self.generator is None:
            logger.warning("AI service not available. Using fallback menu data.")
            return HandlerResult(200, {"menu": self.catalog.menu(category, restaurant_name)})

        outcome = await self._attempt(
            ResponseKind.MENU, llm_client.menu_prompt(restaurant_name, category), llm_client.MENU_SCHEMA
        )
        if isinstance(outcome, Failed):
            logger.error("獲取 %s 菜單時發生錯誤: %s", restaurant_name, outcome.error.message)
            return HandlerResult(500, {
                "error": outcome.error.message,
                "menu": self.catalog.menu(category, restaurant_name),
            })
        return HandlerResult(200, {"menu": outcome.value})

    async def submit_order(self, order_details: OrderDetails, cart: List[CartItem]) -> HandlerResult:
        if self.generator is None:
            logger.warning("AI service not available. Using fallback order confirmation.")
            result = HandlerResult(200, self.catalog.order_confirmation())
        else:
            prompt = llm_client.order_prompt(
                order_details.model_dump(by_alias=True),
                [item.model_dump(by_alias=True) for item in cart],
            )
            outcome = await self._attempt(ResponseKind.ORDER, prompt, llm_client.ORDER_SCHEMA)
            if isinstance(outcome, Failed):
                logger.error("處理訂單時發生錯誤: %s", outcome.error.message)
                result = HandlerResult(500, {
                    **self.catalog.order_confirmation(),
                    "error": outcome.error.message,
                })
            else:
                result = HandlerResult(200, outcome.value)

        await self._persist(result.body["orderNumber"], order_details, cart)
        return result

    async def _persist(self, order_number: str, order_details: OrderDetails, cart: List[CartItem]) -> None:
        if self.order_store is None:
            return
        # The confirmation already exists; persistence problems are only logged
        subtotal = sum(item.price * item.quantity for item in cart)
        try:
            order = ConfirmedOrder(
                order_number=str(order_number),
                customer_name=order_details.name,
                customer_phone=order_details.phone,
                delivery_address=order_details.address,
                payment_method=order_details.payment_method,
                order_notes=order_details.notes,
                items=cart,
                subtotal=subtotal,
                shipping_fee=self.delivery_fee,
                total=subtotal + self.delivery_fee,
            )
            saved = await self.order_store.save_order(order)
        except Exception:
            logger.exception("Order %s was confirmed but could not be persisted", order_number)
            return
        if not saved.success:
            logger.warning("Order %s was confirmed but not persisted: %s", order_number, saved.message)


def build_service(settings) -> DeliveryService:
    """Wire the service from settings once at startup."""
    order_store = None
    if settings.SHEETS_WEBHOOK_URL:
        order_store = SheetsOrderStore(settings.SHEETS_WEBHOOK_URL, timeout=settings.SHEETS_TIMEOUT_SECONDS)
    return DeliveryService(
        generator=llm_client.build_generator(settings),
        catalog=FallbackCatalog(),
        order_store=order_store,
        delivery_fee=settings.DELIVERY_FEE,
    )

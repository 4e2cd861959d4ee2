from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from foodapp.core.errors import ValidationError
from foodapp.schemas import OrderRequest
from foodapp.services.handlers import DeliveryService, HandlerResult

router = APIRouter()


def get_service(request: Request) -> DeliveryService:
    return request.app.state.service


def _respond(result: HandlerResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("/restaurants")
async def list_restaurants(service: DeliveryService = Depends(get_service)):
    """
    List restaurants.

    Generated by the AI service when configured; on any generation failure the
    static list is returned with status 500 and an "error" message.
    """
    return _respond(await service.restaurants())


@router.get("/menu")
async def get_menu(
    restaurant_name: Optional[str] = Query(None, alias="restaurantName"),
    category: Optional[str] = Query(None),
    service: DeliveryService = Depends(get_service),
):
    """Menu for one restaurant, scoped to its category."""
    if not restaurant_name or not category:
        raise ValidationError("Restaurant name and category are required")
    return _respond(await service.menu(restaurant_name, category))


@router.post("/order")
async def submit_order(
    payload: Optional[OrderRequest] = None,
    service: DeliveryService = Depends(get_service),
):
    """Confirm an order and return its number and delivery estimate."""
    if payload is None or payload.order_details is None or payload.cart is None:
        raise ValidationError("Order details and cart are required")
    return _respond(await service.submit_order(payload.order_details, payload.cart))


@router.get("/health")
async def health_check(service: DeliveryService = Depends(get_service)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "Food Delivery API",
        "ai_enabled": service.generator is not None,
    }

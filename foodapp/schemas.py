from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union

# Prices and amounts stay integers on the wire when given as integers
Amount = Union[NonNegativeInt, NonNegativeFloat]


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Restaurant(CamelModel):
    id: str
    name: str
    category: str
    rating: float = Field(description="Expected between 3.5 and 5.0")
    reviews: int = Field(ge=0, description="Number of reviews")
    delivery_time: str = Field(description="Delivery estimate range, e.g. '25-35 分鐘'")
    min_order: Amount = Field(description="Minimum order amount")
    image_search_query: Optional[str] = Field(None, description="Short English image keyword")
    image: Optional[str] = None


class MenuItem(CamelModel):
    id: str
    name: str
    price: Amount
    restaurant_name: str


class CartItem(MenuItem):
    id: str = ""
    restaurant_name: str = ""
    quantity: int = Field(ge=1)


class OrderDetails(CamelModel):
    """Customer contact and delivery fields, passed through untouched."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str = ""
    phone: str = ""
    address: str = ""
    payment_method: str = ""
    notes: str = ""


class OrderRequest(CamelModel):
    order_details: Optional[OrderDetails] = None
    cart: Optional[List[CartItem]] = None


class OrderConfirmation(CamelModel):
    order_number: str = Field(description="ORD- followed by 6 digits")
    estimated_delivery_time: str


class ConfirmedOrder(CamelModel):
    """An order as handed to the persistence webhook."""
    order_number: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    payment_method: str
    order_notes: str = ""
    items: List[CartItem]
    subtotal: Amount
    shipping_fee: Amount
    total: Amount

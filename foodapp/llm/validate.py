from enum import Enum
from typing import Any, Dict, List, Union

from foodapp.core.errors import SchemaMismatch


class ResponseKind(str, Enum):
    RESTAURANTS = "restaurants"
    MENU = "menu"
    ORDER = "order"


RESTAURANT_FIELDS = ("id", "name", "category", "rating", "reviews", "deliveryTime", "minOrder")
MENU_ITEM_FIELDS = ("id", "name", "price", "restaurantName")
ORDER_FIELDS = ("orderNumber", "estimatedDeliveryTime")

_MESSAGES = {
    ResponseKind.RESTAURANTS: "從 AI 服務收到的餐廳資料格式不正確",
    ResponseKind.MENU: "從 AI 服務收到的菜單資料格式不正確",
    ResponseKind.ORDER: "從 AI 服務收到的訂單資料格式不正確",
}


def _missing(record: Any, fields) -> List[str]:
    if not isinstance(record, dict):
        return list(fields)
    return [f for f in fields if record.get(f) is None]


def _validate_collection(data: Any, key: str, fields, kind: ResponseKind) -> List[Dict[str, Any]]:
    items = data.get(key)
    if not isinstance(items, list):
        raise SchemaMismatch(f"{_MESSAGES[kind]}: missing '{key}' list")
    for index, item in enumerate(items):
        missing = _missing(item, fields)
        if missing:
            raise SchemaMismatch(f"{_MESSAGES[kind]}: {key}[{index}] missing {', '.join(missing)}")
    return items


def validate(data: Any, kind: ResponseKind) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Check that a parsed model response has the shape an endpoint needs.

    Only key presence is checked (a null counts as absent; for order fields an
    empty value does too); values are not coerced. Returns the record list
    for restaurants/menu and the two order fields for an order.
    """
    if not isinstance(data, dict):
        raise SchemaMismatch(f"{_MESSAGES[kind]}: expected a JSON object")

    if kind is ResponseKind.RESTAURANTS:
        return _validate_collection(data, "restaurants", RESTAURANT_FIELDS, kind)
    if kind is ResponseKind.MENU:
        return _validate_collection(data, "menu", MENU_ITEM_FIELDS, kind)

    # Empty strings count as missing here: an order needs a real number and estimate
    missing = [f for f in ORDER_FIELDS if not data.get(f)]
    if missing:
        raise SchemaMismatch(f"{_MESSAGES[kind]}: missing {', '.join(missing)}")
    return {f: data[f] for f in ORDER_FIELDS}

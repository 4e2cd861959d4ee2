"""
Static fallback data served whenever the generative path is disabled or fails.

Pure lookups: nothing here touches the network or keeps state.
"""
import random
from typing import Any, Dict, List, Mapping, Tuple
from urllib.parse import quote

from foodapp.schemas import MenuItem, OrderConfirmation, Restaurant

IMAGE_URL_TEMPLATE = "https://picsum.photos/seed/{seed}/500/300"
DEFAULT_CATEGORY = "現代美式料理"
FALLBACK_DELIVERY_TIME = "20-30 分鐘"

# Characters encodeURIComponent leaves alone, beyond what quote() always keeps
_URI_COMPONENT_SAFE = "!*'()"

_RESTAURANTS: Tuple[Restaurant, ...] = (
    Restaurant(id="1", name="熾熱鐵板燒", category="現代美式料理", rating=4.7, reviews=345,
               delivery_time="25-35 分鐘", min_order=150, image_search_query="teppanyaki grill"),
    Restaurant(id="2", name="京都花開壽司", category="日式料理 & 壽司", rating=4.9, reviews=512,
               delivery_time="30-40 分鐘", min_order=200, image_search_query="fresh sushi platter"),
    Restaurant(id="3", name="義大利麵萬歲", category="義式料理 & 披薩", rating=4.6, reviews=420,
               delivery_time="20-30 分鐘", min_order=120, image_search_query="italian pasta pizza"),
    Restaurant(id="4", name="塔可真好吃", category="墨西哥料理 & 塔可", rating=4.5, reviews=288,
               delivery_time="15-25 分鐘", min_order=80, image_search_query="gourmet mexican tacos"),
    Restaurant(id="5", name="正宗川菜館", category="中式料理", rating=4.8, reviews=389,
               delivery_time="30-40 分鐘", min_order=180, image_search_query="sichuan chinese food"),
    Restaurant(id="6", name="法式甜點屋", category="甜點 & 蛋糕", rating=4.9, reviews=267,
               delivery_time="20-30 分鐘", min_order=100, image_search_query="elegant french pastry"),
)

# (name, price) per category; ids are m1..m6 in order
_MENUS: Mapping[str, Tuple[Tuple[str, int], ...]] = {
    "現代美式料理": (
        ("經典漢堡", 180), ("起司漢堡", 200), ("薯條", 80),
        ("奶昔", 120), ("洋蔥圈", 90), ("招牌沙拉", 150),
    ),
    "日式料理 & 壽司": (
        ("綜合壽司拼盤", 320), ("鮭魚生魚片", 280), ("天婦羅烏龍麵", 220),
        ("照燒雞肉飯", 180), ("味噌湯", 60), ("日式煎餃", 120),
    ),
    "義式料理 & 披薩": (
        ("瑪格麗特披薩", 280), ("培根蛋奶義大利麵", 240), ("凱薩沙拉", 160),
        ("蒜香麵包", 80), ("提拉米蘇", 120), ("義式濃縮咖啡", 60),
    ),
    "墨西哥料理 & 塔可": (
        ("牛肉塔可", 120), ("雞肉捲餅", 160), ("酪梨醬", 80),
        ("墨西哥玉米片", 100), ("莎莎醬", 60), ("墨西哥汽水", 50),
    ),
    "中式料理": (
        ("麻婆豆腐", 180), ("宮保雞丁", 220), ("酸辣湯", 80),
        ("炒飯", 120), ("小籠包", 150), ("春捲", 90),
    ),
    "甜點 & 蛋糕": (
        ("巧克力熔岩蛋糕", 150), ("草莓千層", 180), ("檸檬塔", 120),
        ("馬卡龍", 90), ("起司蛋糕", 130), ("冰淇淋", 70),
    ),
}

CATEGORIES: Tuple[str, ...] = tuple(_MENUS)


def image_url(record: Mapping[str, Any]) -> str:
    """Placeholder image seeded by imageSearchQuery, else category, else name."""
    seed = record.get("imageSearchQuery") or record.get("category") or record.get("name") or ""
    return IMAGE_URL_TEMPLATE.format(seed=quote(str(seed), safe=_URI_COMPONENT_SAFE))


def with_image(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {**record, "image": image_url(record)}


class FallbackCatalog:
    def restaurants(self) -> List[Dict[str, Any]]:
        return [
            with_image(r.model_dump(by_alias=True, exclude={"image"}))
            for r in _RESTAURANTS
        ]

    def menu(self, category: str, restaurant_name: str) -> List[Dict[str, Any]]:
        # Unknown categories get the default menu rather than an error
        entries = _MENUS.get(category) or _MENUS[DEFAULT_CATEGORY]
        return [
            MenuItem(
                id=f"m{i}", name=name, price=price, restaurant_name=restaurant_name
            ).model_dump(by_alias=True)
            for i, (name, price) in enumerate(entries, start=1)
        ]

    def order_confirmation(self) -> Dict[str, str]:
        confirmation = OrderConfirmation(
            order_number=f"ORD-{random.randint(100000, 999999)}",
            estimated_delivery_time=FALLBACK_DELIVERY_TIME,
        )
        return confirmation.model_dump(by_alias=True)

"""
Order persistence through a Google Apps Script webhook that appends rows to a sheet.
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import httpx

from foodapp.schemas import ConfirmedOrder

logger = logging.getLogger(__name__)

TW_TZ = ZoneInfo("Asia/Taipei")


@dataclass
class SaveResult:
    success: bool
    message: str


def taipei_timestamp(now: Optional[datetime] = None) -> str:
    """Format a time the way zh-TW locales print it, e.g. '2025/3/7 下午2:05:09'."""
    now = (now or datetime.now(TW_TZ)).astimezone(TW_TZ)
    period = "上午" if now.hour < 12 else "下午"
    hour = now.hour % 12 or 12
    return f"{now.year}/{now.month}/{now.day} {period}{hour}:{now.minute:02d}:{now.second:02d}"


def flatten_order(order: ConfirmedOrder, now: Optional[datetime] = None) -> Dict[str, Any]:
    """One sheet row: customer fields, an 'name xqty' item summary and money totals."""
    return {
        "orderNumber": order.order_number,
        "customerName": order.customer_name,
        "customerPhone": order.customer_phone,
        "deliveryAddress": order.delivery_address,
        "paymentMethod": order.payment_method,
        "orderNotes": order.order_notes,
        "items": ", ".join(f"{item.name} x{item.quantity}" for item in order.items),
        "subtotal": order.subtotal,
        "shippingFee": order.shipping_fee,
        "total": order.total,
        "orderTime": taipei_timestamp(now),
    }


class SheetsOrderStore:
    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def save_order(self, order: ConfirmedOrder) -> SaveResult:
        """POST the flattened order. Never raises; the outcome is in the result."""
        body = json.dumps({"orderData": flatten_order(order)}, ensure_ascii=False)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    self.url,
                    params={"action": "saveOrder"},
                    headers={"Content-Type": "text/plain;charset=utf-8"},
                    content=body.encode("utf-8"),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Saving order %s to Google Sheet failed: %s", order.order_number, e)
            return SaveResult(success=False, message=str(e) or "儲存訂單時發生未知錯誤")

        if not response.is_success:
            message = f"Google Sheets API 回應錯誤，狀態碼: {response.status_code}"
            logger.error("Saving order %s failed: %s", order.order_number, message)
            return SaveResult(success=False, message=message)

        try:
            result = response.json()
        except ValueError:
            # Apps Script may answer with HTML or plain text; an OK status is enough
            logger.warning("Sheet webhook returned non-JSON body for order %s, assuming success",
                           order.order_number)
            result = None

        if isinstance(result, dict) and result.get("success") is False:
            message = result.get("error") or "Google Sheets reported a failure to save."
            logger.error("Sheet webhook rejected order %s: %s", order.order_number, message)
            return SaveResult(success=False, message=message)

        logger.info("Order %s saved to Google Sheet", order.order_number)
        return SaveResult(success=True, message="訂單已成功送出")

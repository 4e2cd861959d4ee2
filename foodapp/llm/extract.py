import json
import logging
from typing import Any

from foodapp.core.errors import MalformedResponse

logger = logging.getLogger(__name__)


def extract_json(text: str) -> Any:
    """
    Recover the JSON object embedded in a free-text model response.

    Models often wrap the payload in prose or ```json fences, so the span from
    the first '{' to the last '}' is parsed. Several objects in one response
    are not told apart: the outermost span wins, stray braces in trailing
    commentary included.
    """
    raw_text = (text or "").strip()
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.error("No JSON object in model response: %r", text)
        raise MalformedResponse("回應中找不到有效的 JSON 物件。", raw_text=text)

    try:
        return json.loads(raw_text[start:end + 1])
    except json.JSONDecodeError as e:
        logger.error("JSON parse failed (%s). Raw model text: %r", e, text)
        raise MalformedResponse("從 AI 服務收到的回應格式無效。", raw_text=text) from e

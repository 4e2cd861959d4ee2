import os
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


class Settings:
    # Generative service (Gemini). Either variable enables it.
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Development
    USE_MOCK: bool = os.getenv("USE_MOCK", "0").lower() in ("1", "true", "yes")

    # Order persistence webhook (Google Apps Script)
    SHEETS_WEBHOOK_URL: Optional[str] = os.getenv("SHEETS_WEBHOOK_URL")
    SHEETS_TIMEOUT_SECONDS: Optional[float] = _optional_float("SHEETS_TIMEOUT_SECONDS")
    DELIVERY_FEE: int = int(os.getenv("DELIVERY_FEE", "30"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def generative_enabled(self) -> bool:
        return bool(self.GEMINI_API_KEY) or self.USE_MOCK

settings = Settings()

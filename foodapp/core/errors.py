from typing import Optional


class FoodAppError(Exception):
    """Base error carrying a human-readable message and an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FoodAppError):
    """Required caller input is missing."""
    status_code = 400


class MethodNotAllowed(FoodAppError):
    status_code = 405

    def __init__(self, message: str = "Method Not Allowed"):
        super().__init__(message)


class GenerationError(FoodAppError):
    """Anything that makes the generated path unusable. Always downgraded to fallback data."""


class ServiceUnavailable(GenerationError):
    pass


class MalformedResponse(GenerationError):
    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class SchemaMismatch(GenerationError):
    pass

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodapp.api.routes import router
from foodapp.core.config import Settings, settings as default_settings
from foodapp.core.errors import FoodAppError, MethodNotAllowed
from foodapp.core.logging import setup_logging
from foodapp.services.handlers import build_service

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.
        Configure logging on startup, report on shutdown.
        """
        setup_logging(settings.LOG_LEVEL)
        logger.info("Starting Food Delivery API (AI %s)",
                    "enabled" if app.state.service.generator is not None else "disabled")
        yield
        logger.info("Shutting down Food Delivery API...")

    app = FastAPI(
        title="Food Delivery API",
        description="Restaurants, menus and order confirmation backed by Gemini with static fallback data",
        version="1.0.0",
        lifespan=lifespan
    )
    # Built once from settings; handlers never read configuration afterwards
    app.state.service = build_service(settings)

    @app.exception_handler(FoodAppError)
    async def food_app_error_handler(request: Request, exc: FoodAppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = MethodNotAllowed().message if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint with basic info"""
        return {
            "service": "Food Delivery API",
            "version": "1.0.0",
            "endpoints": {
                "restaurants": "GET /restaurants",
                "menu": "GET /menu?restaurantName=&category=",
                "order": "POST /order",
                "health": "GET /health"
            }
        }

    return app


app = create_app()

"""PhonePe hosted checkout API: app factory and global error handling."""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.api import api_router
from app.core.config import Settings, get_settings
from app.core.exceptions import AppException
from app.core.logging import configure_logging
from app.services.health_service import HealthProvider, ServiceHealthProvider
from app.services.phonepe_service import PhonePeService

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} failed — "
        f"{exc.error_code} ({exc.status_code}): {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": {},
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    health_provider: Optional[HealthProvider] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Settings are validated here, so missing gateway credentials stop the
    process at startup instead of producing unsigned requests later.
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.state.phonepe_service = PhonePeService(settings, transport=transport)
    app.state.health_provider = health_provider or ServiceHealthProvider(settings)

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(api_router)

    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION} ready — "
        f"environment={settings.ENVIRONMENT}, gateway={settings.PHONEPE_HOST_URL}, "
        f"merchant={settings.PHONEPE_MERCHANT_ID}"
    )
    return app


def create_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    return create_app(settings)

"""
Service Routes.

Endpoints:
  GET /        — Static greeting
  GET /health  — Health mapping from the configured health provider
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.dependencies import get_health_provider
from app.core.exceptions import EncodingError
from app.schemas.phonepe import MessageResponse
from app.services.health_service import HealthProvider

logger = logging.getLogger(__name__)

router = APIRouter()

HELLO_MESSAGE = "Hello World from PhonePe!"


@router.get("/", response_model=MessageResponse, summary="Greeting")
async def hello_world():
    return MessageResponse(message=HELLO_MESSAGE)


@router.get("/health", summary="Service health")
def health(provider: HealthProvider = Depends(get_health_provider)):
    """
    GET /health

    Returns the provider's mapping as-is. A mapping that cannot be
    rendered as JSON is reported as a 500, not raised out of the app.
    """
    status = provider.health()
    try:
        return JSONResponse(content=status)
    except (TypeError, ValueError) as e:
        logger.error(f"[health] failed to encode health status: {e}")
        raise EncodingError("failed to encode health status") from e

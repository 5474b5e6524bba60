"""
PhonePe Pay Route.

Endpoint:
  GET /pay?amount=<rupees> — Start a hosted checkout and redirect to it

On success the browser is sent to the PhonePe pay page with a 302.
Every failure is rendered by the AppException handler as a JSON body
(400 bad amount, 402 gateway rejection, 502/504 gateway faults).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse

from app.core.dependencies import get_phonepe_service
from app.core.exceptions import AppException
from app.schemas.phonepe import ErrorResponse
from app.services.phonepe_service import PhonePeService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/pay",
    summary="Initiate a PhonePe hosted checkout",
    description=(
        "Builds and signs a PG pay request for `amount` rupees, sends it to "
        "PhonePe and redirects to the returned checkout page."
    ),
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    responses={
        302: {"description": "Redirect to the PhonePe pay page"},
        400: {"description": "Amount is not a non-negative integer", "model": ErrorResponse},
        402: {"description": "Gateway rejected the request", "model": ErrorResponse},
        502: {"description": "Gateway unreachable or malformed response", "model": ErrorResponse},
        504: {"description": "Gateway timed out", "model": ErrorResponse},
    },
    tags=["phonepe"],
)
async def pay(
    amount: Optional[str] = Query(None, description="Amount in whole rupees"),
    user_id: Optional[str] = Query(
        None, min_length=1, max_length=36, pattern=r"^[A-Za-z0-9_-]+$"
    ),
    mobile_number: Optional[str] = Query(None, pattern=r"^[0-9]{10}$"),
    service: PhonePeService = Depends(get_phonepe_service),
):
    try:
        redirect_url = await service.initiate_payment(
            amount, user_id=user_id, mobile_number=mobile_number
        )
    except AppException as e:
        logger.info(f"[phonepe] /pay not redirected — {e.error_code}: {e.message}")
        raise

    logger.info(f"[phonepe] /pay redirecting to checkout — amount={amount}")
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)

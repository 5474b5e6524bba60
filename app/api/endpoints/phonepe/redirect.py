from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get(
    "/redirect-url/{transaction_id}",
    response_class=PlainTextResponse,
    summary="Landing page after the PhonePe pay page",
    tags=["phonepe"],
)
async def payment_redirect(transaction_id: str):
    return PlainTextResponse(f"Merchant Transaction ID: {transaction_id}")

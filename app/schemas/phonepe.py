"""
Pydantic models for the PhonePe PG pay API.

Wire payloads use the gateway's camelCase keys; Python attributes stay
snake_case. Field order matches the gateway's documented request shape and
is the order used when the payload is serialized for signing.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GatewayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ──────────────────────────────────────────────────────────────────────
#  Request – POST /pg/v1/pay
# ──────────────────────────────────────────────────────────────────────


class PaymentInstrument(GatewayModel):
    type: str = "PAY_PAGE"


class PaymentInitiationRequest(GatewayModel):
    """Decoded payment-initiation payload (amount in paise)."""

    merchant_id: str
    merchant_transaction_id: str
    merchant_user_id: str
    amount: int = Field(ge=0)
    redirect_url: str
    redirect_mode: str
    callback_url: str
    mobile_number: str
    payment_instrument: PaymentInstrument = Field(default_factory=PaymentInstrument)


class SignedEnvelope(BaseModel):
    """Base64 request body plus its X-VERIFY signature."""

    request: str
    x_verify: str

    def body(self) -> dict[str, str]:
        return {"request": self.request}


# ──────────────────────────────────────────────────────────────────────
#  Response
# ──────────────────────────────────────────────────────────────────────


class RedirectInfo(GatewayModel):
    url: Optional[str] = None
    method: Optional[str] = None


class InstrumentResponse(GatewayModel):
    type: Optional[str] = None
    redirect_info: Optional[RedirectInfo] = None


class PaymentResponseData(GatewayModel):
    merchant_id: Optional[str] = None
    merchant_transaction_id: Optional[str] = None
    instrument_response: Optional[InstrumentResponse] = None


class PaymentInitiationResponse(GatewayModel):
    success: bool
    code: str
    message: str = ""
    data: Optional[PaymentResponseData] = None

    @property
    def redirect_url(self) -> Optional[str]:
        if self.data is None or self.data.instrument_response is None:
            return None
        info = self.data.instrument_response.redirect_info
        return info.url if info is not None else None


# ──────────────────────────────────────────────────────────────────────
#  Service endpoints
# ──────────────────────────────────────────────────────────────────────


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: dict = Field(default_factory=dict)

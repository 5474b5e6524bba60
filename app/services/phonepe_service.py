"""
PhonePe Payment Gateway Service.

Builds, signs and sends PG pay (hosted checkout) requests to PhonePe and
turns the gateway envelope into a checkout redirect URL.

Flow for one /pay call:
  1. build_payment_request  → PaymentInitiationRequest (amount in paise)
  2. encode_payload         → base64 of the compact JSON payload
  3. generate_x_verify      → sha256(payload + endpoint + salt key) ### index
  4. PhonePeService.send    → POST /pg/v1/pay, parse envelope
  5. resolve_redirect_url   → checkout URL, or PaymentInitiationRejectedError
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import logging
import re
import uuid
from typing import Optional, Union
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from app.core.config import Settings
from app.core.exceptions import (
    EncodingError,
    GatewayTimeoutError,
    GatewayUnreachableError,
    InvalidAmountError,
    MalformedGatewayResponseError,
    PaymentInitiationRejectedError,
)
from app.schemas.phonepe import (
    PaymentInitiationRequest,
    PaymentInitiationResponse,
    PaymentInstrument,
    SignedEnvelope,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════
# Constants
# ══════════════════════════════════════════════════════════════════════

PAY_ENDPOINT = "/pg/v1/pay"
PAY_PAGE_INSTRUMENT = "PAY_PAGE"
X_VERIFY_SEPARATOR = "###"

SUBUNITS_PER_UNIT = 100
# Largest amount (in rupees) accepted from callers: unsigned 32-bit range.
MAX_AMOUNT = 2**32 - 1

AMOUNT_RE = re.compile(r"[0-9]+")


# ══════════════════════════════════════════════════════════════════════
# Pure helper functions
# ══════════════════════════════════════════════════════════════════════


def generate_x_verify(
    base64_payload: str,
    endpoint: str,
    salt_key: str,
    salt_index: str,
) -> str:
    """Compute the X-VERIFY header value for a base64 payload."""
    data = base64_payload + endpoint + salt_key
    checksum = hashlib.sha256(data.encode("utf-8")).hexdigest()
    return f"{checksum}{X_VERIFY_SEPARATOR}{salt_index}"


def parse_amount(raw: Union[str, int, None]) -> int:
    """
    Parse a caller-supplied amount in whole rupees.

    Only plain ASCII digits are accepted; signs, decimals and whitespace
    are rejected.
    """
    if isinstance(raw, bool):
        raise InvalidAmountError("Failed to parse amount", {"amount": raw})

    if isinstance(raw, int):
        value = raw
    else:
        text = raw or ""
        if not AMOUNT_RE.fullmatch(text):
            raise InvalidAmountError("Failed to parse amount", {"amount": raw})
        value = int(text)

    if value < 0 or value > MAX_AMOUNT:
        raise InvalidAmountError(
            f"Amount must be between 0 and {MAX_AMOUNT}",
            {"amount": raw},
        )
    return value


def build_payment_request(
    amount: Union[str, int, None],
    settings: Settings,
    user_id: Optional[str] = None,
    mobile_number: Optional[str] = None,
) -> PaymentInitiationRequest:
    """
    Assemble the PG pay payload for ``amount`` rupees.

    A new merchant transaction ID is generated on every call.
    """
    amount = parse_amount(amount)
    merchant_transaction_id = str(uuid.uuid4())
    base_url = settings.APP_BASE_URL

    return PaymentInitiationRequest(
        merchant_id=settings.PHONEPE_MERCHANT_ID,
        merchant_transaction_id=merchant_transaction_id,
        merchant_user_id=user_id or settings.PHONEPE_DEFAULT_USER_ID,
        amount=amount * SUBUNITS_PER_UNIT,
        redirect_url=f"{base_url}/redirect-url/{merchant_transaction_id}",
        redirect_mode=settings.PHONEPE_REDIRECT_MODE,
        callback_url=f"{base_url}/callback-url",
        mobile_number=mobile_number or settings.PHONEPE_DEFAULT_MOBILE_NUMBER,
        payment_instrument=PaymentInstrument(type=PAY_PAGE_INSTRUMENT),
    )


def serialize_payload(payload: PaymentInitiationRequest) -> bytes:
    """Compact JSON with gateway keys, in declaration order."""
    try:
        return payload.model_dump_json(by_alias=True).encode("utf-8")
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise EncodingError(f"failed to marshal payment request: {e}") from e


def encode_payload(payload: PaymentInitiationRequest) -> str:
    return base64.b64encode(serialize_payload(payload)).decode("ascii")


def sign_payload(
    payload: PaymentInitiationRequest,
    salt_key: str,
    salt_index: str,
    endpoint: str = PAY_ENDPOINT,
) -> SignedEnvelope:
    encoded = encode_payload(payload)
    return SignedEnvelope(
        request=encoded,
        x_verify=generate_x_verify(encoded, endpoint, salt_key, salt_index),
    )


def _is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def resolve_redirect_url(response: PaymentInitiationResponse) -> str:
    """
    Return the hosted checkout URL from a gateway response.

    The URL is only trusted when the gateway reported success.
    """
    if not response.success:
        raise PaymentInitiationRejectedError(
            response.message or "Payment initiation was rejected by the gateway",
            gateway_code=response.code,
        )

    url = (response.redirect_url or "").strip()
    if not url or not _is_absolute_url(url):
        raise PaymentInitiationRejectedError(
            "Gateway response did not include a valid redirect URL",
            gateway_code=response.code,
            details={"redirect_url": url or None},
        )
    return url


# ══════════════════════════════════════════════════════════════════════
# PhonePeService class
# ══════════════════════════════════════════════════════════════════════


class PhonePeService:
    """
    Sends signed PG pay requests to PhonePe.

    ``transport`` is handed to ``httpx.AsyncClient``; tests pass an
    ``httpx.MockTransport`` in place of the network.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def pay_url(self) -> str:
        return f"{self.settings.PHONEPE_HOST_URL}{PAY_ENDPOINT}"

    @property
    def timeout(self) -> float:
        return self.settings.PHONEPE_REQUEST_TIMEOUT

    def build_request(
        self,
        amount: Union[str, int, None],
        user_id: Optional[str] = None,
        mobile_number: Optional[str] = None,
    ) -> PaymentInitiationRequest:
        return build_payment_request(
            amount,
            self.settings,
            user_id=user_id,
            mobile_number=mobile_number,
        )

    def sign(self, payload: PaymentInitiationRequest) -> SignedEnvelope:
        return sign_payload(
            payload,
            self.settings.PHONEPE_KEY_API_VALUE,
            self.settings.PHONEPE_KEY_API_INDEX,
        )

    async def _post(self, envelope: SignedEnvelope) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            return await client.post(
                self.pay_url,
                json=envelope.body(),
                headers={
                    "Content-Type": "application/json",
                    "X-VERIFY": envelope.x_verify,
                },
            )

    async def send(
        self, payload: PaymentInitiationRequest
    ) -> PaymentInitiationResponse:
        """
        POST the signed payload to /pg/v1/pay and parse the envelope.

        The whole call, body read included, is bounded by
        PHONEPE_REQUEST_TIMEOUT; httpx's own timeout only bounds each phase.
        """
        envelope = self.sign(payload)
        txn_id = payload.merchant_transaction_id

        logger.info(
            f"[phonepe] POST {PAY_ENDPOINT} — txn={txn_id}, amount={payload.amount}"
        )

        try:
            resp = await asyncio.wait_for(self._post(envelope), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"[phonepe] POST {PAY_ENDPOINT} timed out — txn={txn_id}: {e}")
            raise GatewayTimeoutError(
                f"PhonePe did not respond within {self.timeout}s",
                {"merchant_transaction_id": txn_id},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"[phonepe] POST {PAY_ENDPOINT} error — txn={txn_id}: {e}")
            raise GatewayUnreachableError(
                f"failed to send request: {e}",
                {"merchant_transaction_id": txn_id},
            ) from e

        if resp.status_code >= 400:
            logger.warning(
                f"[phonepe] POST {PAY_ENDPOINT} returned HTTP {resp.status_code} — txn={txn_id}"
            )

        try:
            body = resp.json()
        except ValueError as e:
            logger.error(
                f"[phonepe] non-JSON response — txn={txn_id}, HTTP {resp.status_code}"
            )
            raise MalformedGatewayResponseError(
                "failed to parse gateway response",
                {"status_code": resp.status_code},
            ) from e

        try:
            result = PaymentInitiationResponse.model_validate(body)
        except ValidationError as e:
            logger.error(
                f"[phonepe] unexpected response shape — txn={txn_id}: {e.error_count()} errors"
            )
            raise MalformedGatewayResponseError(
                "unexpected gateway response shape",
                {"status_code": resp.status_code},
            ) from e

        logger.info(
            f"[phonepe] response — txn={txn_id}, success={result.success}, code={result.code}"
        )
        return result

    async def initiate_payment(
        self,
        amount: Union[str, int, None],
        user_id: Optional[str] = None,
        mobile_number: Optional[str] = None,
    ) -> str:
        """Build, send and resolve a payment; returns the checkout URL."""
        payload = self.build_request(amount, user_id=user_id, mobile_number=mobile_number)
        response = await self.send(payload)
        url = resolve_redirect_url(response)
        logger.info(
            f"[phonepe] checkout ready — txn={payload.merchant_transaction_id}"
        )
        return url

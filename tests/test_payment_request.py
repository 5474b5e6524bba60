"""Payment request building, amount parsing and payload encoding."""

import base64
import json
import uuid

import pytest

from app.core.exceptions import InvalidAmountError
from app.services.phonepe_service import (
    MAX_AMOUNT,
    PAY_ENDPOINT,
    build_payment_request,
    encode_payload,
    generate_x_verify,
    parse_amount,
    serialize_payload,
    sign_payload,
)


def test_amount_is_converted_to_paise(settings):
    request = build_payment_request(30, settings)

    assert request.amount == 3000


def test_zero_amount_is_accepted(settings):
    request = build_payment_request("0", settings)

    assert request.amount == 0


@pytest.mark.parametrize(
    "raw",
    [None, "", "abc", "-5", "+5", "1.5", " 30", "30 ", "30\n", "1e3", "\u0663\u0660"],
)
def test_unparseable_amount_is_rejected(raw):
    with pytest.raises(InvalidAmountError) as exc_info:
        parse_amount(raw)

    assert exc_info.value.status_code == 400


def test_amount_above_maximum_is_rejected():
    assert parse_amount(str(MAX_AMOUNT)) == MAX_AMOUNT
    with pytest.raises(InvalidAmountError):
        parse_amount(str(MAX_AMOUNT + 1))
    with pytest.raises(InvalidAmountError):
        parse_amount(-1)


def test_request_fields_come_from_settings(settings):
    request = build_payment_request(30, settings)

    assert request.merchant_id == "MERCHANTUAT"
    assert request.merchant_user_id == "123242"
    assert request.mobile_number == "9999999999"
    assert request.redirect_mode == "REDIRECT"
    assert request.payment_instrument.type == "PAY_PAGE"
    assert request.callback_url == "http://localhost:8080/callback-url"
    assert request.redirect_url == (
        f"http://localhost:8080/redirect-url/{request.merchant_transaction_id}"
    )
    uuid.UUID(request.merchant_transaction_id)


def test_caller_supplied_payer_details_override_defaults(settings):
    request = build_payment_request(
        1, settings, user_id="user-42", mobile_number="9123456789"
    )

    assert request.merchant_user_id == "user-42"
    assert request.mobile_number == "9123456789"


def test_transaction_id_is_fresh_for_every_request(settings):
    ids = {build_payment_request(1, settings).merchant_transaction_id for _ in range(20)}

    assert len(ids) == 20


def test_payload_uses_gateway_keys_in_order(settings):
    request = build_payment_request(30, settings)

    decoded = json.loads(serialize_payload(request))

    assert list(decoded) == [
        "merchantId",
        "merchantTransactionId",
        "merchantUserId",
        "amount",
        "redirectUrl",
        "redirectMode",
        "callbackUrl",
        "mobileNumber",
        "paymentInstrument",
    ]
    assert decoded["amount"] == 3000
    assert decoded["paymentInstrument"] == {"type": "PAY_PAGE"}


def test_payload_is_compact_json(settings):
    raw = serialize_payload(build_payment_request(30, settings))

    assert b": " not in raw
    assert b", " not in raw


def test_base64_encoding_reproduces_canonical_json(settings):
    request = build_payment_request(30, settings)

    encoded = encode_payload(request)

    decoded = base64.b64decode(encoded)
    assert decoded == serialize_payload(request)
    assert base64.b64encode(decoded).decode("ascii") == encoded


def test_signed_envelope_signs_the_encoded_payload(settings):
    request = build_payment_request(30, settings)

    envelope = sign_payload(request, "secret", "1")

    assert envelope.request == encode_payload(request)
    assert envelope.x_verify == generate_x_verify(envelope.request, PAY_ENDPOINT, "secret", "1")
    assert envelope.body() == {"request": envelope.request}

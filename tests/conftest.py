"""Shared fixtures: fixture settings and a stubbed PhonePe gateway."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

SUCCESS_BODY = {
    "success": True,
    "code": "PAYMENT_INITIATED",
    "message": "Payment initiated",
    "data": {
        "merchantId": "MERCHANTUAT",
        "merchantTransactionId": "mockTransactionId",
        "instrumentResponse": {
            "type": "PAY_PAGE",
            "redirectInfo": {
                "url": "http://example.com/redirect",
                "method": "GET",
            },
        },
    },
}

FAILURE_BODY = {
    "success": False,
    "code": "BAD_REQUEST",
    "message": "Please check the inputs you have provided.",
    "data": {},
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        PHONEPE_HOST_URL="https://gateway.test/apis/pg-sandbox",
        PHONEPE_MERCHANT_ID="MERCHANTUAT",
        PHONEPE_KEY_API_VALUE="099eb0cd-02cf-4e2a-8aca-3e6c6aff0399",
        PHONEPE_KEY_API_INDEX="1",
        APP_BASE_URL="http://localhost:8080",
    )


class GatewayStub:
    """Records outbound requests and replies with a canned body."""

    def __init__(self, body=None, status_code: int = 200, exc: Exception | None = None):
        self.body = body if body is not None else SUCCESS_BODY
        self.status_code = status_code
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def gateway() -> GatewayStub:
    return GatewayStub()


@pytest.fixture
def make_client(settings):
    def _make(stub: GatewayStub, health_provider=None) -> TestClient:
        app = create_app(
            settings,
            transport=stub.transport,
            health_provider=health_provider,
        )
        return TestClient(app)

    return _make

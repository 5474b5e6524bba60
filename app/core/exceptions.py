"""
Custom exception hierarchy for the PhonePe checkout service.

All application-level exceptions inherit from AppException so they can be
caught by a single global handler (see app.main).
"""


class AppException(Exception):
    """Base for all app exceptions."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidAmountError(AppException):
    """Raised when the caller-supplied amount is not a non-negative integer."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=400,
            error_code="INVALID_AMOUNT",
            message=message,
            details=details,
        )


class EncodingError(AppException):
    """Raised when a payload or response body cannot be serialized."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=500,
            error_code="ENCODING_ERROR",
            message=message,
            details=details,
        )


class GatewayUnreachableError(AppException):
    """Raised when the PhonePe gateway cannot be reached at the transport level."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int = 502,
        error_code: str = "GATEWAY_UNREACHABLE",
    ):
        super().__init__(
            status_code=status_code,
            error_code=error_code,
            message=message,
            details=details,
        )


class GatewayTimeoutError(GatewayUnreachableError):
    """Raised when the gateway call exceeds the configured timeout."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message=message,
            details=details,
            status_code=504,
            error_code="GATEWAY_TIMEOUT",
        )


class MalformedGatewayResponseError(AppException):
    """Raised when the gateway body is not JSON or not the expected envelope."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status_code=502,
            error_code="MALFORMED_GATEWAY_RESPONSE",
            message=message,
            details=details,
        )


class PaymentInitiationRejectedError(AppException):
    """Raised when the gateway declines the request or returns no checkout URL."""

    def __init__(
        self,
        message: str,
        gateway_code: str | None = None,
        details: dict | None = None,
    ):
        self.gateway_code = gateway_code
        merged = {"gateway_code": gateway_code, **(details or {})}
        super().__init__(
            status_code=402,
            error_code="PAYMENT_INITIATION_REJECTED",
            message=message,
            details=merged,
        )

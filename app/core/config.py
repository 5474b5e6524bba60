from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "PhonePe Hosted Checkout API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Public base URL of this service, used for gateway redirect/callback URLs
    APP_BASE_URL: str = "http://localhost:8080"

    # ── PhonePe gateway settings ──
    # Required
    PHONEPE_HOST_URL: str
    PHONEPE_MERCHANT_ID: str
    PHONEPE_KEY_API_VALUE: str
    PHONEPE_KEY_API_INDEX: str
    # Optional
    PHONEPE_REDIRECT_MODE: str = "REDIRECT"
    PHONEPE_DEFAULT_USER_ID: str = "123242"
    PHONEPE_DEFAULT_MOBILE_NUMBER: str = "9999999999"
    PHONEPE_REQUEST_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator(
        "PHONEPE_HOST_URL",
        "PHONEPE_MERCHANT_ID",
        "PHONEPE_KEY_API_VALUE",
        "PHONEPE_KEY_API_INDEX",
    )
    @classmethod
    def validate_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("PHONEPE_HOST_URL", "APP_BASE_URL")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("PHONEPE_REQUEST_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("PHONEPE_REQUEST_TIMEOUT must be positive")
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = ["development", "staging", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()

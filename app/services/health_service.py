from typing import Protocol

from app.core.config import Settings


class HealthProvider(Protocol):
    def health(self) -> dict[str, str]: ...


class ServiceHealthProvider:
    """Default provider: reports process liveness and build info."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def health(self) -> dict[str, str]:
        return {
            "status": "up",
            "app": self.settings.APP_NAME,
            "version": self.settings.APP_VERSION,
            "environment": self.settings.ENVIRONMENT,
        }

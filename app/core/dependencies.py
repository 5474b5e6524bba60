from fastapi import Request

from app.services.health_service import HealthProvider
from app.services.phonepe_service import PhonePeService


def get_phonepe_service(request: Request) -> PhonePeService:
    return request.app.state.phonepe_service


def get_health_provider(request: Request) -> HealthProvider:
    return request.app.state.health_provider

from fastapi import APIRouter

from app.api.endpoints import system
from app.api.endpoints.phonepe.router import phonepe_router

api_router = APIRouter()

api_router.include_router(system.router, tags=["system"])

# PhonePe routes are mounted at the root: /pay, /redirect-url/{id}
api_router.include_router(phonepe_router)

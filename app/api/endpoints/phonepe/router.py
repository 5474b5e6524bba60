"""
PhonePe Router Aggregator.

  GET /pay                         — Initiate hosted checkout (302)
  GET /redirect-url/{transaction}  — Post-checkout landing
"""

from fastapi import APIRouter

from app.api.endpoints.phonepe.pay import router as pay_router
from app.api.endpoints.phonepe.redirect import router as redirect_router

phonepe_router = APIRouter()

phonepe_router.include_router(pay_router)
phonepe_router.include_router(redirect_router)

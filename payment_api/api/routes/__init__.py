"""API routes package."""

from fastapi import APIRouter

from payment_api.api.routes.health import router as health_router
from payment_api.api.routes.transactions import router as transactions_router

# Create API router with all sub-routers
api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(transactions_router)


__all__ = [
    "api_router",
    "health_router",
    "transactions_router",
]

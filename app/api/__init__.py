from fastapi import APIRouter

from .routes import (
    auth,
    cafes,
    customers,
    health,
    qr,
    redemptions,
)

api_router = APIRouter()

# Health check
api_router.include_router(health.router, tags=["health"])

# Owner identity
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Cafe setup, settings and dashboard stats
api_router.include_router(cafes.router, prefix="/cafes", tags=["cafes"])

# Cafe-scoped resources
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(redemptions.router, prefix="/redemptions", tags=["redemptions"])
api_router.include_router(qr.router, prefix="/qr", tags=["qr"])

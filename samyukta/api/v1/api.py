# samyukta/api/v1/api.py

from fastapi import APIRouter

from samyukta.api.v1.endpoints import (
    check_in,
    health,
    registrations,
    scan,
    slots,
    stats,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(slots.router)
api_router.include_router(registrations.router)
api_router.include_router(check_in.router)
api_router.include_router(scan.router)
api_router.include_router(stats.router)
api_router.include_router(health.router)

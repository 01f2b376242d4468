"""
Top‑level router.

Aggregates the endpoint routers.  When new endpoints are added,
include their routers here.
"""

from fastapi import APIRouter

from .endpoints import audit, auth, calendar, categories, health, payments, services

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(categories.router, prefix="/api/categories", tags=["categories"])
# The services router mixes the public /api/services listing with the
# portal's /services routes, so it carries full paths and no prefix.
router.include_router(services.router, tags=["services"])
router.include_router(payments.router, tags=["payments"])
router.include_router(calendar.router, tags=["bookings"])
router.include_router(auth.router, prefix="/admin", tags=["auth"])
router.include_router(audit.router, prefix="/admin", tags=["audit"])

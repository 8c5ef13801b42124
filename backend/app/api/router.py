"""
Central API router that aggregates all route modules.

Booking paths are part of the public contract (/booking, /booking/booking/{id})
and are mounted without a version prefix.
"""

from fastapi import APIRouter
from app.api.routes import auth, bookings

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(bookings.router)

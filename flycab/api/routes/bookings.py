"""
Booking endpoints
=================

GET /api/v1/bookings -- most recent bookings, newest first
"""

from fastapi import APIRouter, Depends, Query, Request

from flycab.api.dependencies import get_booking_store
from flycab.api.middleware import limiter
from flycab.api.schemas import BookingResponse
from flycab.config import settings
from flycab.infrastructure.repositories import SqlBookingStore

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List recent bookings",
)
@limiter.limit(settings.rate_limit)
async def list_recent_bookings(
    request: Request,
    limit: int = Query(settings.recent_bookings_limit, ge=1, le=50),
    store: SqlBookingStore = Depends(get_booking_store),
):
    return await store.list_recent_bookings(limit)

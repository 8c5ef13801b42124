"""
Booking endpoints: read, reserve and swap the caller's hotel room.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_booking_service
from app.schemas.booking import BookingInput, BookingIdResponse, BookingResponse
from app.services.booking_service import BookingService
from app.services.cache_service import (
    get_cache_generation,
    get_cached_booking,
    set_cached_booking,
    invalidate_booking_cache,
)
from app.core.security import get_current_user_id

router = APIRouter(prefix="/booking", tags=["Booking"])


@router.get("", response_model=BookingResponse)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Get the authenticated user's booking with its room. 404 if none."""
    generation = await get_cache_generation(user_id)
    cached = await get_cached_booking(user_id)
    if cached:
        return BookingResponse.model_validate(cached)

    booking = await service.get_booking(user_id)
    response = BookingResponse.model_validate(booking)
    await set_cached_booking(user_id, response.model_dump(), generation)
    return response


@router.post("", response_model=BookingIdResponse)
async def create_booking(
    booking_data: BookingInput,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Reserve a slot in a room.

    403 if the ticket does not entitle a hotel stay, the room is full, or the
    user already holds a booking; 404 if enrollment, ticket or room is missing.
    """
    booking = await service.create_booking(user_id, booking_data.room_id)
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=booking.id)


@router.put("/booking/{booking_id}", response_model=BookingIdResponse)
async def update_booking(
    booking_id: int,
    booking_data: BookingInput,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Move the user's booking to another room.

    The old room's slot is released and the new room's slot claimed in one
    transaction.
    """
    booking = await service.update_booking(user_id, booking_id, booking_data.room_id)
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=booking.id)

"""
Booking endpoints: reserve a room, read the current reservation, change room.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.schemas.booking import MAX_ID, BookingCreate, BookingIdResponse, BookingWithRoomResponse
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.cache_service import (
    get_cached_booking,
    invalidate_booking_cache,
    set_cached_booking,
)
from hotel_booking.infrastructure import (
    SqlBookingRepository,
    SqlEnrollmentRepository,
    SqlTicketRepository,
)
from hotel_booking.core.config import get_settings
from hotel_booking.core.security import get_current_user_id
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/booking", tags=["Booking"])


def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(
        bookings=SqlBookingRepository(db),
        enrollments=SqlEnrollmentRepository(db),
        tickets=SqlTicketRepository(db),
        lock_rooms=get_settings().ROOM_ROW_LOCKING,
    )


@router.post("", response_model=BookingIdResponse)
async def make_reservation(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Reserve a room.

    Requires an enrollment and a paid, in-person ticket that includes hotel.
    Returns 404 if the enrollment or room is missing, 402 if the ticket does
    not qualify, 403 if the room is full.
    """
    booking_id = await service.make_reservation(user_id, booking_data.room_id)
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=booking_id)


@router.get("", response_model=BookingWithRoomResponse)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """
    Get the authenticated user's reservation with its room.
    Cached in Redis until the user books or changes room.
    """
    cached = await get_cached_booking(user_id)
    if cached:
        logger.info("booking_cache_hit", user_id=user_id)
        return cached

    booking = await service.get_booking(user_id)
    response = BookingWithRoomResponse.model_validate(booking)
    await set_cached_booking(user_id, response.model_dump(by_alias=True, mode="json"))
    return response


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def change_room(
    booking_id: Annotated[int, Path(gt=0, le=MAX_ID)],
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    """Move the user's booking to another room. Returns 403 if the new room is full."""
    updated_id = await service.change_room(user_id, booking_id, booking_data.room_id)
    await invalidate_booking_cache(user_id)
    return BookingIdResponse(booking_id=updated_id)

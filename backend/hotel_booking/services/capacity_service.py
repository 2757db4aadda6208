"""
Room capacity check.

With lock=True the room row is read FOR UPDATE, so two requests targeting
the same room serialize between this check and the booking write. Without
it (or on SQLite, which has no row locks) the check is advisory: concurrent
requests can both observe the last free slot.
"""

from typing import Optional

from hotel_booking.core.errors import NoVacancyError, NotFoundError
from hotel_booking.core.logging import get_logger
from hotel_booking.models import Room
from hotel_booking.services.interfaces import BookingRepository

logger = get_logger(__name__)


async def ensure_room_vacancy(
    room_id: int,
    bookings: BookingRepository,
    lock: bool = False,
    moving_booking_id: Optional[int] = None,
) -> Room:
    """
    Return the room if it exists and has a free slot.

    moving_booking_id is the booking being moved into this room; it is left
    out of the occupancy count.
    """
    room = await bookings.get_room(room_id, lock=lock)
    if not room:
        raise NotFoundError("This room does not exist")

    occupied = await bookings.count_bookings_for_room(
        room_id, exclude_booking_id=moving_booking_id
    )
    if occupied >= room.capacity:
        logger.warning(
            "room_full",
            room_id=room_id,
            capacity=room.capacity,
            occupied=occupied,
        )
        raise NoVacancyError("No vacancy")

    return room

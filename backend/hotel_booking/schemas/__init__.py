from hotel_booking.schemas.booking import (
    BookingCreate, BookingIdResponse, BookingWithRoomResponse, RoomResponse,
)

__all__ = [
    "BookingCreate", "BookingIdResponse", "BookingWithRoomResponse", "RoomResponse",
]

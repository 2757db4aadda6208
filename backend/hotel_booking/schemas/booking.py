"""
Pydantic schemas for booking-related request/response validation.

The wire format is camelCase (roomId, bookingId, hotelId); the booking
payload nests its room under "Room".
Ids are bounded to the int4 range of the id columns.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

# Largest value a PostgreSQL INTEGER (int4) column holds
MAX_ID = 2**31 - 1


class BookingCreate(BaseModel):
    # StrictInt: JSON booleans and numeric strings are rejected, not coerced
    room_id: StrictInt = Field(..., alias="roomId", gt=0, le=MAX_ID)

    model_config = ConfigDict(populate_by_name=True)


class BookingIdResponse(BaseModel):
    booking_id: int = Field(..., alias="bookingId")

    model_config = ConfigDict(populate_by_name=True)


class RoomResponse(BaseModel):
    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BookingWithRoomResponse(BaseModel):
    id: int
    room: RoomResponse = Field(..., alias="Room")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

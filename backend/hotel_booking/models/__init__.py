from hotel_booking.models.user import User
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.ticket import Ticket, TicketType, TicketStatus
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.models.booking import Booking

__all__ = [
    "User", "Enrollment", "Ticket", "TicketType", "TicketStatus",
    "Hotel", "Room", "Booking",
]

"""
Booking eligibility: only enrolled users holding a paid, in-person,
hotel-inclusive ticket may reserve a room.
"""

from typing import Optional

from hotel_booking.core.errors import NotFoundError, RequirementsNotMetError
from hotel_booking.core.logging import get_logger
from hotel_booking.models import Ticket, TicketStatus
from hotel_booking.services.interfaces import EnrollmentRepository, TicketRepository

logger = get_logger(__name__)


def ticket_allows_hotel(ticket: Optional[Ticket]) -> bool:
    if ticket is None or ticket.status != TicketStatus.PAID.value:
        return False
    ticket_type = ticket.ticket_type
    return not ticket_type.is_remote and ticket_type.includes_hotel


async def ensure_booking_eligibility(
    user_id: int,
    enrollments: EnrollmentRepository,
    tickets: TicketRepository,
) -> Ticket:
    """
    Raise unless the user may book a hotel room.

    Raises:
        NotFoundError: the user has no enrollment
        RequirementsNotMetError: no ticket, unpaid, remote, or without hotel
    """
    enrollment = await enrollments.find_by_user_id(user_id)
    if not enrollment:
        logger.info("booking_denied", user_id=user_id, reason="no_enrollment")
        raise NotFoundError("No enrollment found")

    ticket = await tickets.find_by_enrollment_id(enrollment.id)
    if not ticket_allows_hotel(ticket):
        logger.info(
            "booking_denied",
            user_id=user_id,
            reason="requirements_not_met",
            ticket_id=ticket.id if ticket else None,
        )
        raise RequirementsNotMetError("Booking requirements not met")

    return ticket

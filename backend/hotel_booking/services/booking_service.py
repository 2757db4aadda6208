"""
Booking orchestration: reserve a room, read the current reservation, move
to another room.

PIPELINE
========

  make_reservation: eligibility -> capacity -> insert
  change_room:      owned booking lookup -> capacity on destination -> update

Eligibility and capacity live in their own modules so each check can be
exercised against fake repositories.

CONCURRENCY
===========

Problem:
  Two eligible users request the last slot of a room at the same time.
  Both count N-1 bookings, both insert. Result: overbooking.

Mitigation:
  When lock_rooms is enabled the capacity check reads the room row with
  SELECT ... FOR UPDATE. The lock is held by the request transaction until
  get_db commits, so the second request counts after the first insert.
  Rooms are never written by this service; the lock is only a mutex.
"""

from hotel_booking.core.errors import BookingError, NotFoundError
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import (
    booking_latency,
    outcome_label,
    record_booking_attempt,
    record_room_change,
)
from hotel_booking.models import Booking
from hotel_booking.services.capacity_service import ensure_room_vacancy
from hotel_booking.services.eligibility_service import ensure_booking_eligibility
from hotel_booking.services.interfaces import (
    BookingRepository,
    EnrollmentRepository,
    TicketRepository,
)

logger = get_logger(__name__)


class BookingService:

    def __init__(
        self,
        bookings: BookingRepository,
        enrollments: EnrollmentRepository,
        tickets: TicketRepository,
        lock_rooms: bool = False,
    ):
        self.bookings = bookings
        self.enrollments = enrollments
        self.tickets = tickets
        self.lock_rooms = lock_rooms

    async def make_reservation(self, user_id: int, room_id: int) -> int:
        """Reserve a room for the user. Returns the new booking id."""
        with booking_latency.time():
            try:
                await ensure_booking_eligibility(user_id, self.enrollments, self.tickets)
                await ensure_room_vacancy(room_id, self.bookings, lock=self.lock_rooms)
                booking = await self.bookings.create(user_id, room_id)
            except BookingError as e:
                record_booking_attempt(outcome_label(e.kind.value))
                raise
            except Exception:
                record_booking_attempt("error")
                raise

        record_booking_attempt(outcome_label())
        logger.info("booking_created", booking_id=booking.id, user_id=user_id, room_id=room_id)
        return booking.id

    async def get_booking(self, user_id: int) -> Booking:
        """The user's current booking with its room."""
        booking = await self.bookings.find_first_for_user(user_id)
        if not booking:
            raise NotFoundError()
        return booking

    async def change_room(self, user_id: int, booking_id: int, room_id: int) -> int:
        """
        Move one of the user's bookings to another room.

        The booking must belong to the user. Capacity is checked against the
        destination room, not counting the booking being moved.
        """
        try:
            booking = await self.bookings.find_for_user(user_id, booking_id)
            if not booking:
                raise NotFoundError("Booking not found")

            previous_room_id = booking.room_id
            room = await ensure_room_vacancy(
                room_id,
                self.bookings,
                lock=self.lock_rooms,
                moving_booking_id=booking.id,
            )
            await self.bookings.update_room(booking, room)
        except BookingError as e:
            record_room_change(outcome_label(e.kind.value))
            raise
        except Exception:
            record_room_change("error")
            raise

        record_room_change(outcome_label())
        logger.info(
            "room_changed",
            booking_id=booking.id,
            user_id=user_id,
            from_room_id=previous_room_id,
            to_room_id=room.id,
        )
        return booking.id

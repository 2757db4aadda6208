"""
Repository interfaces for the booking pipeline.
Services depend on these; SQLAlchemy implementations live in
hotel_booking.infrastructure, in-memory fakes in the test suite.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hotel_booking.models import Booking, Enrollment, Room, Ticket


class EnrollmentRepository(ABC):

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        """Return the user's enrollment, or None if they never enrolled."""


class TicketRepository(ABC):

    @abstractmethod
    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        """Return the enrollment's ticket with its ticket_type loaded."""


class BookingRepository(ABC):
    """
    Persistence operations for bookings and the rooms they reference.

    Implementations:
    - SqlBookingRepository: SQLAlchemy async session
    - FakeBookingRepository (tests): plain dictionaries
    """

    @abstractmethod
    async def get_room(self, room_id: int, lock: bool = False) -> Optional[Room]:
        """
        Fetch a room.

        Args:
            room_id: Room to fetch
            lock: Hold a row lock on the room until the transaction ends

        Returns:
            The room, or None if it does not exist
        """

    @abstractmethod
    async def count_bookings_for_room(
        self, room_id: int, exclude_booking_id: Optional[int] = None
    ) -> int:
        """Number of bookings referencing the room, optionally ignoring one booking."""

    @abstractmethod
    async def create(self, user_id: int, room_id: int) -> Booking:
        """Insert a booking and return it with its id assigned."""

    @abstractmethod
    async def find_first_for_user(self, user_id: int) -> Optional[Booking]:
        """The user's first booking, with its room loaded."""

    @abstractmethod
    async def find_for_user(self, user_id: int, booking_id: int) -> Optional[Booking]:
        """A specific booking, only if it belongs to the user."""

    @abstractmethod
    async def update_room(self, booking: Booking, room: Room) -> Booking:
        """Point the booking at another room."""

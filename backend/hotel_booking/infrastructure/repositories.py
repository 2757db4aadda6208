"""
SQLAlchemy implementations of the booking repositories.

Each repository wraps the request-scoped AsyncSession. Writes are flushed,
never committed here: the get_db dependency owns the transaction.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.models import Booking, Enrollment, Room, Ticket
from hotel_booking.services.interfaces import (
    BookingRepository,
    EnrollmentRepository,
    TicketRepository,
)


class SqlEnrollmentRepository(EnrollmentRepository):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        result = await self.db.execute(select(Enrollment).where(Enrollment.user_id == user_id))
        return result.scalar_one_or_none()


class SqlTicketRepository(TicketRepository):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        result = await self.db.execute(
            select(Ticket)
            .where(Ticket.enrollment_id == enrollment_id)
            .options(selectinload(Ticket.ticket_type))
            .order_by(Ticket.id)
            .limit(1)
        )
        return result.scalar_one_or_none()


class SqlBookingRepository(BookingRepository):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_room(self, room_id: int, lock: bool = False) -> Optional[Room]:
        query = select(Room).where(Room.id == room_id)
        if lock:
            # Rendered as FOR UPDATE on PostgreSQL; dropped by SQLite's compiler
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def count_bookings_for_room(
        self, room_id: int, exclude_booking_id: Optional[int] = None
    ) -> int:
        query = select(func.count()).select_from(Booking).where(Booking.room_id == room_id)
        if exclude_booking_id is not None:
            query = query.where(Booking.id != exclude_booking_id)
        return (await self.db.execute(query)).scalar_one()

    async def create(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        await self.db.flush()
        await self.db.refresh(booking)
        return booking

    async def find_first_for_user(self, user_id: int) -> Optional[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .options(selectinload(Booking.room))
            .order_by(Booking.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_for_user(self, user_id: int, booking_id: int) -> Optional[Booking]:
        result = await self.db.execute(
            select(Booking)
            .where(Booking.id == booking_id, Booking.user_id == user_id)
            .options(selectinload(Booking.room))
        )
        return result.scalar_one_or_none()

    async def update_room(self, booking: Booking, room: Room) -> Booking:
        booking.room = room
        await self.db.flush()
        return booking

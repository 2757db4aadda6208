"""
Pytest fixtures for test database, client, authentication and fakes.

API tests run against a fresh database per test: in-memory SQLite by
default, or TEST_DATABASE_URL (e.g. a PostgreSQL test database).
Service tests use the in-memory fake repositories defined here.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from hotel_booking.main import app
from hotel_booking.db.base import Base
from hotel_booking.db.session import get_db
from hotel_booking.core.security import create_access_token
from hotel_booking.models import (
    Booking, Enrollment, Hotel, Room, Ticket, TicketStatus, TicketType, User,
)
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.interfaces import (
    BookingRepository, EnrollmentRepository, TicketRepository,
)

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class Factory:
    """Creates committed rows in the test database."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._seq = 0

    async def _save(self, obj):
        self.session.add(obj)
        await self.session.commit()
        await self.session.refresh(obj)
        return obj

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    async def user(self) -> User:
        return await self._save(User(email=f"user{self._next()}@example.com"))

    async def enrollment(self, user: User) -> Enrollment:
        n = self._next()
        return await self._save(Enrollment(
            user_id=user.id,
            name=f"Attendee {n}",
            cpf=f"{n:011d}",
            phone="(21) 99999-0000",
        ))

    async def ticket_type(self, is_remote: bool = False, includes_hotel: bool = True) -> TicketType:
        return await self._save(TicketType(
            name="Presencial + Hotel" if includes_hotel else "Presencial",
            price=60000,
            is_remote=is_remote,
            includes_hotel=includes_hotel,
        ))

    async def ticket(
        self,
        enrollment: Enrollment,
        ticket_type: TicketType,
        status: TicketStatus = TicketStatus.PAID,
    ) -> Ticket:
        return await self._save(Ticket(
            enrollment_id=enrollment.id,
            ticket_type_id=ticket_type.id,
            status=status.value,
        ))

    async def eligible_user(self) -> User:
        """A user with an enrollment and a paid, in-person, hotel-inclusive ticket."""
        user = await self.user()
        enrollment = await self.enrollment(user)
        await self.ticket(enrollment, await self.ticket_type())
        return user

    async def hotel(self) -> Hotel:
        return await self._save(Hotel(
            name=f"Hotel {self._next()}",
            image="https://example.com/hotel.jpg",
        ))

    async def room(self, hotel: Hotel, capacity: int = 3) -> Room:
        return await self._save(Room(
            name=f"{100 + self._next()}",
            capacity=capacity,
            hotel_id=hotel.id,
        ))

    async def booking(self, user: User, room: Room) -> Booking:
        return await self._save(Booking(user_id=user.id, room_id=room.id))


@pytest_asyncio.fixture
async def factory(db_session: AsyncSession) -> Factory:
    return Factory(db_session)


def headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user.id)})}"}


@pytest.fixture
def make_headers():
    """Build bearer headers for any user."""
    return headers_for


@pytest_asyncio.fixture
async def test_user(factory: Factory) -> User:
    """An eligible user: enrolled with a paid hotel ticket."""
    return await factory.eligible_user()


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Authorization headers with Bearer token."""
    return headers_for(test_user)


@pytest_asyncio.fixture
async def test_hotel(factory: Factory) -> Hotel:
    return await factory.hotel()


@pytest_asyncio.fixture
async def test_room(factory: Factory, test_hotel: Hotel) -> Room:
    """A room with 3 free slots."""
    return await factory.room(test_hotel, capacity=3)


@pytest_asyncio.fixture
async def full_room(factory: Factory, test_hotel: Hotel) -> Room:
    """A single-occupancy room already taken by another user."""
    room = await factory.room(test_hotel, capacity=1)
    await factory.booking(await factory.eligible_user(), room)
    return room


# In-memory fakes for service-level tests


class FakeEnrollmentRepository(EnrollmentRepository):

    def __init__(self):
        self.by_user = {}

    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        return self.by_user.get(user_id)


class FakeTicketRepository(TicketRepository):

    def __init__(self):
        self.by_enrollment = {}

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        return self.by_enrollment.get(enrollment_id)


class FakeBookingRepository(BookingRepository):

    def __init__(self):
        self.rooms = {}
        self.bookings = {}
        self.locked_room_ids = []
        self._next_id = 1

    async def get_room(self, room_id: int, lock: bool = False) -> Optional[Room]:
        if lock:
            self.locked_room_ids.append(room_id)
        return self.rooms.get(room_id)

    async def count_bookings_for_room(
        self, room_id: int, exclude_booking_id: Optional[int] = None
    ) -> int:
        return sum(
            1 for b in self.bookings.values()
            if b.room_id == room_id and b.id != exclude_booking_id
        )

    async def create(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(id=self._next_id, user_id=user_id, room_id=room_id)
        booking.room = self.rooms[room_id]
        self.bookings[booking.id] = booking
        self._next_id += 1
        return booking

    async def find_first_for_user(self, user_id: int) -> Optional[Booking]:
        owned = [b for b in self.bookings.values() if b.user_id == user_id]
        return min(owned, key=lambda b: b.id) if owned else None

    async def find_for_user(self, user_id: int, booking_id: int) -> Optional[Booking]:
        booking = self.bookings.get(booking_id)
        if booking is None or booking.user_id != user_id:
            return None
        return booking

    async def update_room(self, booking: Booking, room: Room) -> Booking:
        booking.room = room
        booking.room_id = room.id
        return booking


class FakeWorld:
    """Fake repositories plus helpers to seed them."""

    def __init__(self):
        self.enrollments = FakeEnrollmentRepository()
        self.tickets = FakeTicketRepository()
        self.bookings = FakeBookingRepository()

    def service(self, lock_rooms: bool = False) -> BookingService:
        return BookingService(
            bookings=self.bookings,
            enrollments=self.enrollments,
            tickets=self.tickets,
            lock_rooms=lock_rooms,
        )

    def add_room(self, room_id: int, capacity: int) -> Room:
        room = Room(id=room_id, name=str(room_id), capacity=capacity, hotel_id=1)
        self.bookings.rooms[room_id] = room
        return room

    def enroll(
        self,
        user_id: int,
        status: Optional[TicketStatus] = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
    ) -> Enrollment:
        """Enroll a user; status=None leaves them without a ticket."""
        enrollment = Enrollment(id=user_id, user_id=user_id)
        self.enrollments.by_user[user_id] = enrollment
        if status is not None:
            self.tickets.by_enrollment[enrollment.id] = Ticket(
                id=user_id,
                enrollment_id=enrollment.id,
                status=status.value,
                ticket_type=TicketType(is_remote=is_remote, includes_hotel=includes_hotel),
            )
        return enrollment


@pytest.fixture
def world() -> FakeWorld:
    return FakeWorld()

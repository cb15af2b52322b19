"""
Pytest fixtures for test database, client, authentication, and fake stores.

Each test gets a fresh in-memory SQLite database; the app's get_db
dependency is overridden to hand out the same session the fixtures use.
"""

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token
from app.models import Booking, Enrollment, Hotel, Room, Ticket, TicketStatus, TicketType, User
from app.repositories.interfaces import BookingStore, EnrollmentStore, TicketStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session
        await db_session.commit()

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Factories ---------------------------------------------------------------


async def _save(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@pytest.fixture
def make_user(db_session: AsyncSession):
    counter = iter(range(1, 10_000))

    async def _make() -> User:
        return await _save(db_session, User(email=f"guest{next(counter)}@example.com"))

    return _make


@pytest.fixture
def make_ticket_holder(db_session: AsyncSession, make_user):
    """Create a user with an enrollment and a ticket of the given kind."""

    async def _make(
        status: TicketStatus = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
    ) -> User:
        user = await make_user()
        enrollment = await _save(db_session, Enrollment(user_id=user.id, name="Guest", phone="555-0100"))
        ticket_type = await _save(
            db_session,
            TicketType(name="Pass", price=250, is_remote=is_remote, includes_hotel=includes_hotel),
        )
        await _save(
            db_session,
            Ticket(ticket_type_id=ticket_type.id, enrollment_id=enrollment.id, status=status.value),
        )
        return user

    return _make


@pytest_asyncio.fixture
async def hotel(db_session: AsyncSession) -> Hotel:
    return await _save(db_session, Hotel(name="Grand Plaza", image="https://example.com/plaza.jpg"))


@pytest.fixture
def make_room(db_session: AsyncSession, hotel: Hotel):
    async def _make(capacity: int = 3, name: str = "101") -> Room:
        return await _save(db_session, Room(name=name, capacity=capacity, hotel_id=hotel.id))

    return _make


@pytest.fixture
def make_booking(db_session: AsyncSession):
    async def _make(user: User, room: Room) -> Booking:
        return await _save(db_session, Booking(user_id=user.id, room_id=room.id))

    return _make


def auth_headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers_for


# --- In-memory stores ----------------------------------------------------------


class FakeBookingStore(BookingStore):
    """Dict-backed BookingStore for service unit tests."""

    def __init__(self) -> None:
        self.rooms: dict[int, Room] = {}
        self.bookings: dict[int, Booking] = {}
        self.room_lock_requests: list[int] = []
        self._next_id = 1

    def add_room(self, room_id: int, capacity: int) -> Room:
        room = Room(id=room_id, name=str(room_id), capacity=capacity, hotel_id=1)
        self.rooms[room_id] = room
        return room

    def add_booking(self, user_id: int, room_id: int) -> Booking:
        booking = Booking(id=self._next_id, user_id=user_id, room_id=room_id)
        self._next_id += 1
        self.bookings[booking.id] = booking
        return booking

    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        for booking in sorted(self.bookings.values(), key=lambda b: b.id):
            if booking.user_id == user_id:
                booking.room = self.rooms.get(booking.room_id)
                return booking
        return None

    async def find_by_room_id(self, room_id: int) -> list[Booking]:
        return [b for b in self.bookings.values() if b.room_id == room_id]

    async def find_room_by_id(self, room_id: int, for_update: bool = False) -> Optional[Room]:
        if for_update:
            self.room_lock_requests.append(room_id)
        return self.rooms.get(room_id)

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    async def insert(self, room_id: int, user_id: int) -> Booking:
        return self.add_booking(user_id, room_id)

    async def update(self, booking_id: int, room_id: int) -> Optional[Booking]:
        booking = self.bookings.get(booking_id)
        if booking is None:
            return None
        booking.room_id = room_id
        return booking


class FakeEnrollmentStore(EnrollmentStore):
    def __init__(self) -> None:
        self.by_user: dict[int, Enrollment] = {}

    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        return self.by_user.get(user_id)


class FakeTicketStore(TicketStore):
    def __init__(self) -> None:
        self.by_enrollment: dict[int, Ticket] = {}

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        return self.by_enrollment.get(enrollment_id)


class FakeRegistry:
    """Bundles the three fakes and seeds ticket holders."""

    def __init__(self) -> None:
        self.bookings = FakeBookingStore()
        self.enrollments = FakeEnrollmentStore()
        self.tickets = FakeTicketStore()

    def add_ticket_holder(
        self,
        user_id: int,
        status: TicketStatus = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
    ) -> None:
        enrollment = Enrollment(id=user_id, user_id=user_id, name="Guest")
        self.enrollments.by_user[user_id] = enrollment
        ticket_type = TicketType(id=user_id, name="Pass", price=100, is_remote=is_remote, includes_hotel=includes_hotel)
        ticket = Ticket(id=user_id, ticket_type_id=ticket_type.id, enrollment_id=enrollment.id, status=status.value)
        ticket.ticket_type = ticket_type
        self.tickets.by_enrollment[enrollment.id] = ticket


@pytest.fixture
def fakes() -> FakeRegistry:
    return FakeRegistry()

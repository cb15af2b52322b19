"""
Store interfaces (repository pattern).

Stores are stateless gateways: one query per method, None or an empty
list on a miss. Turning absence into a domain error is the service's job.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.models import Booking, Enrollment, Room, Ticket


class BookingStore(ABC):
    """Persistence operations for bookings and the rooms they occupy."""

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        """Return the user's first booking with its Room loaded, or None."""
        ...

    @abstractmethod
    async def find_by_room_id(self, room_id: int) -> list[Booking]:
        """Return every booking occupying the room."""
        ...

    @abstractmethod
    async def find_room_by_id(self, room_id: int, for_update: bool = False) -> Optional[Room]:
        """
        Return a room by id, or None.

        With for_update the row stays locked until the surrounding
        transaction ends.
        """
        ...

    @abstractmethod
    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        ...

    @abstractmethod
    async def insert(self, room_id: int, user_id: int) -> Booking:
        """Insert a booking and return it with id and timestamps populated."""
        ...

    @abstractmethod
    async def update(self, booking_id: int, room_id: int) -> Optional[Booking]:
        """Point an existing booking at another room. None if it does not exist."""
        ...


class EnrollmentStore(ABC):
    """Read-only lookup into the enrollment subsystem."""

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        ...


class TicketStore(ABC):
    """Read-only lookup into the ticket subsystem."""

    @abstractmethod
    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        """Return the enrollment's ticket with its TicketType loaded, or None."""
        ...

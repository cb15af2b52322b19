"""
Booking service - all hotel booking rules live here.

ALLOCATION RULES
================

Eligibility (create only):
  The user's enrollment must have a ticket that is not RESERVED (unpaid),
  not remote, and includes hotel accommodation. Any one failure is 403.

Capacity (create and update):
  occupants = number of bookings referencing the room
  occupants == room.capacity  ->  403

  Equality, not >=: the count can only exceed capacity if something other
  than this check inserts bookings.

Update specifics:
  - A missing booking is 403, not 404.
  - The count includes the booking being moved, so moving into its own
    full room is rejected. BOOKING_UPDATE_EXCLUDES_OWN_ROOM turns that off.
  - No eligibility re-check.

Concurrency:
  Count-then-write is two round trips. Two requests racing for the last
  slot can both pass the check. BOOKING_LOCK_ROOM_ON_WRITE reads the room
  with SELECT ... FOR UPDATE so concurrent writers to the same room queue
  behind the request transaction.
"""

import time
from typing import Optional

from app.core.exceptions import (
    BookingNotFoundError,
    DomainError,
    RoomFullError,
    RoomNotFoundError,
    TicketNotEligibleError,
    UnknownBookingError,
    NotFoundError,
)
from app.core.logging import get_logger
from app.core.metrics import booking_latency, record_booking_attempt
from app.models import Booking, Room, Ticket, TicketStatus
from app.repositories.interfaces import BookingStore, EnrollmentStore, TicketStore

logger = get_logger(__name__)


def ineligibility_reason(ticket: Optional[Ticket]) -> Optional[str]:
    """Return why a ticket cannot be used to book a room, or None if it can."""
    if ticket is None:
        return "no_ticket"
    if ticket.status == TicketStatus.RESERVED.value:
        return "ticket_not_paid"
    if ticket.ticket_type.is_remote:
        return "remote_ticket"
    if not ticket.ticket_type.includes_hotel:
        return "hotel_not_included"
    return None


class BookingService:
    """Service for hotel room bookings."""

    def __init__(
        self,
        bookings: BookingStore,
        enrollments: EnrollmentStore,
        tickets: TicketStore,
        *,
        lock_room_on_write: bool = False,
        update_excludes_own_room: bool = False,
    ) -> None:
        self._bookings = bookings
        self._enrollments = enrollments
        self._tickets = tickets
        self._lock_room_on_write = lock_room_on_write
        self._update_excludes_own_room = update_excludes_own_room

    async def get_booking_by_user_id(self, user_id: int) -> Booking:
        """
        Return the user's booking with its Room.

        Raises:
            BookingNotFoundError: If the user has no booking.
        """
        booking = await self._bookings.find_by_user_id(user_id)
        if booking is None:
            raise BookingNotFoundError(user_id)
        return booking

    async def create_booking(self, user_id: int, room_id: int) -> int:
        """
        Book a room for the user and return the new booking id.

        Raises:
            TicketNotEligibleError: If the user's ticket does not allow a hotel room.
            RoomNotFoundError: If the room does not exist.
            RoomFullError: If the room is at capacity.
        """
        start = time.perf_counter()
        try:
            await self._check_eligibility(user_id)
            await self._check_vacancy(room_id)
            booking = await self._bookings.insert(room_id, user_id)
        except DomainError as e:
            self._record_rejection("create", e)
            raise
        finally:
            booking_latency.labels(operation="create").observe(time.perf_counter() - start)

        record_booking_attempt("create", "success")
        logger.info("booking_created", booking_id=booking.id, user_id=user_id, room_id=room_id)
        return booking.id

    async def update_booking(self, booking_id: int, room_id: int) -> int:
        """
        Move a booking to another room and return its id.

        Raises:
            UnknownBookingError: If the booking does not exist.
            RoomNotFoundError: If the room does not exist.
            RoomFullError: If the room is at capacity.
        """
        start = time.perf_counter()
        try:
            booking = await self._bookings.find_by_id(booking_id)
            if booking is None:
                raise UnknownBookingError(booking_id)

            previous_room_id = booking.room_id
            moving = booking if self._update_excludes_own_room else None
            await self._check_vacancy(room_id, moving=moving)

            updated = await self._bookings.update(booking_id, room_id)
            if updated is None:
                raise UnknownBookingError(booking_id)
        except DomainError as e:
            self._record_rejection("update", e)
            raise
        finally:
            booking_latency.labels(operation="update").observe(time.perf_counter() - start)

        record_booking_attempt("update", "success")
        logger.info(
            "booking_room_changed",
            booking_id=updated.id,
            from_room_id=previous_room_id,
            to_room_id=room_id,
        )
        return updated.id

    async def _check_eligibility(self, user_id: int) -> None:
        enrollment = await self._enrollments.find_by_user_id(user_id)
        ticket = None
        if enrollment is not None:
            ticket = await self._tickets.find_by_enrollment_id(enrollment.id)

        reason = ineligibility_reason(ticket)
        if reason is not None:
            raise TicketNotEligibleError(user_id, reason)

    async def _check_vacancy(self, room_id: int, moving: Optional[Booking] = None) -> Room:
        room = await self._bookings.find_room_by_id(room_id, for_update=self._lock_room_on_write)
        if room is None:
            raise RoomNotFoundError(room_id)

        occupants = await self._bookings.find_by_room_id(room_id)
        if moving is not None:
            occupants = [b for b in occupants if b.id != moving.id]

        if len(occupants) == room.capacity:
            raise RoomFullError(room_id, room.capacity)
        return room

    @staticmethod
    def _record_rejection(operation: str, error: DomainError) -> None:
        outcome = "not_found" if isinstance(error, NotFoundError) else "forbidden"
        record_booking_attempt(operation, outcome)
        logger.warning(
            "booking_rejected",
            operation=operation,
            code=error.code.value,
            reason=getattr(error, "reason", None),
        )

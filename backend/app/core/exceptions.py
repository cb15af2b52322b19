"""
Domain errors raised by the service layer.

The API layer maps each kind to a status code: NotFoundError -> 404,
ForbiddenError -> 403. Stores never raise these.
"""

from enum import Enum


class ErrorCode(str, Enum):
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    UNKNOWN_BOOKING = "UNKNOWN_BOOKING"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    TICKET_NOT_ELIGIBLE = "TICKET_NOT_ELIGIBLE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A requested resource does not exist."""


class ForbiddenError(DomainError):
    """The caller may not perform the operation."""


class BookingNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__(ErrorCode.BOOKING_NOT_FOUND, "No booking found for this user")
        self.user_id = user_id


class UnknownBookingError(ForbiddenError):
    """Raised when the booking to update does not exist."""

    def __init__(self, booking_id: int) -> None:
        super().__init__(ErrorCode.UNKNOWN_BOOKING, "Booking cannot be changed")
        self.booking_id = booking_id


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_id: int) -> None:
        super().__init__(ErrorCode.ROOM_NOT_FOUND, "Room not found")
        self.room_id = room_id


class RoomFullError(ForbiddenError):
    def __init__(self, room_id: int, capacity: int) -> None:
        super().__init__(ErrorCode.ROOM_FULL, "Room is at full capacity")
        self.room_id = room_id
        self.capacity = capacity


class TicketNotEligibleError(ForbiddenError):
    """Raised when the user's ticket does not entitle them to a hotel room."""

    def __init__(self, user_id: int, reason: str) -> None:
        super().__init__(ErrorCode.TICKET_NOT_ELIGIBLE, "Ticket does not include hotel booking")
        self.user_id = user_id
        self.reason = reason

from app.models.user import User
from app.models.enrollment import Enrollment
from app.models.ticket import Ticket, TicketStatus, TicketType
from app.models.hotel import Hotel, Room
from app.models.booking import Booking

__all__ = [
    "User", "Enrollment", "Ticket", "TicketStatus", "TicketType",
    "Hotel", "Room", "Booking",
]

"""
Store layer - persistence gateways behind swappable interfaces.
"""

from .interfaces import BookingStore, EnrollmentStore, TicketStore
from .booking_repository import SQLAlchemyBookingStore
from .enrollment_repository import SQLAlchemyEnrollmentStore
from .ticket_repository import SQLAlchemyTicketStore

__all__ = [
    'BookingStore', 'EnrollmentStore', 'TicketStore',
    'SQLAlchemyBookingStore', 'SQLAlchemyEnrollmentStore', 'SQLAlchemyTicketStore',
]

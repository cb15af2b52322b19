"""
Dependency wiring: builds a BookingService on top of the request session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.repositories import (
    SQLAlchemyBookingStore,
    SQLAlchemyEnrollmentStore,
    SQLAlchemyTicketStore,
)
from app.services.booking_service import BookingService


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    settings = get_settings()
    return BookingService(
        bookings=SQLAlchemyBookingStore(db),
        enrollments=SQLAlchemyEnrollmentStore(db),
        tickets=SQLAlchemyTicketStore(db),
        lock_room_on_write=settings.BOOKING_LOCK_ROOM_ON_WRITE,
        update_excludes_own_room=settings.BOOKING_UPDATE_EXCLUDES_OWN_ROOM,
    )

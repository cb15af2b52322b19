"""
SQLAlchemy implementation of the BookingStore.

Every method runs on the request's AsyncSession; nothing is committed
here. The session dependency owns the transaction.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Booking, Room
from app.repositories.interfaces import BookingStore
from app.core.metrics import record_db_operation


class SQLAlchemyBookingStore(BookingStore):
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_user_id(self, user_id: int) -> Optional[Booking]:
        record_db_operation("read")
        result = await self._db.execute(
            select(Booking)
            .options(selectinload(Booking.room))
            .where(Booking.user_id == user_id)
            .order_by(Booking.id.asc())
            .limit(1)
            # Objects already in the identity map still get their Room loaded
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_by_room_id(self, room_id: int) -> list[Booking]:
        record_db_operation("read")
        result = await self._db.execute(
            select(Booking).where(Booking.room_id == room_id).order_by(Booking.id.asc())
        )
        return list(result.scalars().all())

    async def find_room_by_id(self, room_id: int, for_update: bool = False) -> Optional[Room]:
        record_db_operation("read")
        query = select(Room).where(Room.id == room_id)
        if for_update:
            query = query.with_for_update()
        result = await self._db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        record_db_operation("read")
        result = await self._db.execute(select(Booking).where(Booking.id == booking_id))
        return result.scalar_one_or_none()

    async def insert(self, room_id: int, user_id: int) -> Booking:
        record_db_operation("write")
        booking = Booking(room_id=room_id, user_id=user_id)
        self._db.add(booking)
        await self._db.flush()
        await self._db.refresh(booking)
        return booking

    async def update(self, booking_id: int, room_id: int) -> Optional[Booking]:
        record_db_operation("write")
        booking = await self._db.get(Booking, booking_id)
        if booking is None:
            return None
        booking.room_id = room_id
        await self._db.flush()
        # updated_at is set server-side
        await self._db.refresh(booking)
        return booking

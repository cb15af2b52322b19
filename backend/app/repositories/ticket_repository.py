from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Ticket
from app.repositories.interfaces import TicketStore
from app.core.metrics import record_db_operation


class SQLAlchemyTicketStore(TicketStore):
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_enrollment_id(self, enrollment_id: int) -> Optional[Ticket]:
        record_db_operation("read")
        result = await self._db.execute(
            select(Ticket)
            .options(selectinload(Ticket.ticket_type))
            .where(Ticket.enrollment_id == enrollment_id)
            .order_by(Ticket.id.asc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

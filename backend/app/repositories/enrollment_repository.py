from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Enrollment
from app.repositories.interfaces import EnrollmentStore
from app.core.metrics import record_db_operation


class SQLAlchemyEnrollmentStore(EnrollmentStore):
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_user_id(self, user_id: int) -> Optional[Enrollment]:
        record_db_operation("read")
        result = await self._db.execute(select(Enrollment).where(Enrollment.user_id == user_id))
        return result.scalar_one_or_none()

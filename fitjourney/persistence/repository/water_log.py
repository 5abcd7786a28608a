"""PostgreSQL implementation of WaterLog repository."""

from datetime import datetime
from typing import List

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitjourney.domain.model import WaterLog
from fitjourney.domain.repository import WaterLogRepository
from fitjourney.domain.value import UserId, WaterLogId
from fitjourney.persistence.mappers import row_to_water_log, water_log_to_dict
from fitjourney.persistence.tables import water_logs_table


class PostgresWaterLogRepository(WaterLogRepository):
    """PostgreSQL implementation of WaterLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, log: WaterLog) -> WaterLogId:
        """Insert a water log entry."""
        stmt = insert(water_logs_table).values(**water_log_to_dict(log))
        await self.session.execute(stmt)
        await self.session.flush()
        return log.id

    async def list_by_user_since(
        self, user_id: UserId, since: datetime
    ) -> List[WaterLog]:
        """List a user's entries created at or after `since`, newest first."""
        stmt = (
            select(water_logs_table)
            .where(
                and_(
                    water_logs_table.c.user_id == user_id,
                    water_logs_table.c.created_at >= since,
                )
            )
            .order_by(water_logs_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_water_log(dict(row)) for row in rows]

"""PostgreSQL implementation of ActivityLog repository."""

from typing import List, Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fitjourney.domain.model import ActivityLog
from fitjourney.domain.repository import ActivityLogRepository
from fitjourney.domain.value import ActivityLogId, UserId
from fitjourney.persistence.mappers import activity_log_to_dict, row_to_activity_log
from fitjourney.persistence.tables import habit_logs_table


class PostgresActivityLogRepository(ActivityLogRepository):
    """PostgreSQL implementation of ActivityLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, log: ActivityLog) -> ActivityLogId:
        """Insert a new habit log.

        Args:
            log: Log to insert

        Returns:
            ID of the inserted log
        """
        stmt = insert(habit_logs_table).values(**activity_log_to_dict(log))
        await self.session.execute(stmt)
        await self.session.flush()
        return log.id

    async def find_by_id(self, log_id: ActivityLogId) -> Optional[ActivityLog]:
        """Find a habit log by ID.

        Args:
            log_id: Log ID to look up

        Returns:
            ActivityLog if found, None otherwise
        """
        stmt = select(habit_logs_table).where(habit_logs_table.c.id == log_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_activity_log(dict(row)) if row else None

    async def list_by_user(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ActivityLog]:
        """List a user's habit logs, newest first.

        Uses idx_habit_logs_user_created.

        Args:
            user_id: Owner of the logs
            limit: Maximum number of results (None for all)
            offset: Number of results to skip

        Returns:
            Logs ordered by created_at descending
        """
        stmt = (
            select(habit_logs_table)
            .where(habit_logs_table.c.user_id == user_id)
            .order_by(habit_logs_table.c.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_activity_log(dict(row)) for row in rows]

    async def mark_verified(
        self, log_id: ActivityLogId, verifier_id: UserId
    ) -> bool:
        """Verify a log that is not verified yet.

        Args:
            log_id: Log to verify
            verifier_id: Verifying identity

        Returns:
            True if a row was updated
        """
        stmt = (
            update(habit_logs_table)
            .where(
                and_(
                    habit_logs_table.c.id == log_id,
                    habit_logs_table.c.verified.is_(False),
                )
            )
            .values(verified=True, verified_by=verifier_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

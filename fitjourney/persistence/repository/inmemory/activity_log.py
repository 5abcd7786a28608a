"""In-memory activity log repository for testing."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from fitjourney.domain.model.activity_log import ActivityLog
from fitjourney.domain.repository.activity_log import ActivityLogRepository
from fitjourney.domain.value import ActivityLogId, UserId


class InMemoryActivityLogRepository(ActivityLogRepository):
    """In-memory implementation of ActivityLogRepository for testing."""

    def __init__(self) -> None:
        self._logs: dict[ActivityLogId, ActivityLog] = {}

    async def insert(self, log: ActivityLog) -> ActivityLogId:
        """Insert a log.

        Raises:
            IntegrityError: If a log with the same ID exists
        """
        if log.id in self._logs:
            raise IntegrityError("Duplicate habit log id", None, Exception())
        self._logs[log.id] = log
        return log.id

    async def find_by_id(self, log_id: ActivityLogId) -> Optional[ActivityLog]:
        """Find a log by ID."""
        return self._logs.get(log_id)

    async def list_by_user(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ActivityLog]:
        """List a user's logs, newest first."""
        matches = [log for log in self._logs.values() if log.user_id == user_id]
        matches.sort(key=lambda log: log.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return matches[offset:end]

    async def mark_verified(
        self, log_id: ActivityLogId, verifier_id: UserId
    ) -> bool:
        """Verify an unverified log."""
        log = self._logs.get(log_id)
        if log is None or log.verified:
            return False
        self._logs[log_id] = log.model_copy(
            update={"verified": True, "verified_by": verifier_id}
        )
        return True

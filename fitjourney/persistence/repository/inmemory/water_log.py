"""In-memory water log repository for testing."""

from datetime import datetime
from typing import List

from fitjourney.domain.model.water_log import WaterLog
from fitjourney.domain.repository.water_log import WaterLogRepository
from fitjourney.domain.value import UserId, WaterLogId


class InMemoryWaterLogRepository(WaterLogRepository):
    """In-memory implementation of WaterLogRepository for testing."""

    def __init__(self) -> None:
        self._logs: list[WaterLog] = []

    async def insert(self, log: WaterLog) -> WaterLogId:
        """Append an entry."""
        self._logs.append(log)
        return log.id

    async def list_by_user_since(
        self, user_id: UserId, since: datetime
    ) -> List[WaterLog]:
        """List a user's entries since `since`, newest first."""
        matches = [
            log
            for log in self._logs
            if log.user_id == user_id and log.created_at >= since
        ]
        return sorted(matches, key=lambda log: log.created_at, reverse=True)

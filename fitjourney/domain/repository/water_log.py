"""WaterLog repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from fitjourney.domain.model.water_log import WaterLog
from fitjourney.domain.value import UserId, WaterLogId


class WaterLogRepository(ABC):
    """Repository for WaterLog entity."""

    @abstractmethod
    async def insert(self, log: WaterLog) -> WaterLogId:
        """Persist a new water log entry.

        Args:
            log: The entry to insert

        Returns:
            The identifier of the stored entry
        """
        pass

    @abstractmethod
    async def list_by_user_since(
        self, user_id: UserId, since: datetime
    ) -> List[WaterLog]:
        """List a user's entries created at or after `since`, newest first.

        Args:
            user_id: Owner of the entries
            since: Inclusive lower bound on created_at

        Returns:
            Matching entries
        """
        pass

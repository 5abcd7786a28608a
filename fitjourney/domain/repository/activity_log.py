"""ActivityLog repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from fitjourney.domain.model.activity_log import ActivityLog
from fitjourney.domain.value import ActivityLogId, UserId


class ActivityLogRepository(ABC):
    """Repository for ActivityLog entity.

    Defines the contract for habit log persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def insert(self, log: ActivityLog) -> ActivityLogId:
        """Persist a new log.

        Args:
            log: The log to insert (already validated)

        Returns:
            The identifier of the stored log
        """
        pass

    @abstractmethod
    async def find_by_id(self, log_id: ActivityLogId) -> Optional[ActivityLog]:
        """Find a log by ID.

        Args:
            log_id: The log's unique identifier

        Returns:
            The log if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ActivityLog]:
        """List a user's logs, newest first.

        Each call returns a fresh snapshot.

        Args:
            user_id: Owner of the logs
            limit: Maximum number of logs to return (None for all)
            offset: Number of logs to skip

        Returns:
            Logs ordered by created_at descending
        """
        pass

    @abstractmethod
    async def mark_verified(
        self, log_id: ActivityLogId, verifier_id: UserId
    ) -> bool:
        """Set verified=True and verified_by on an unverified log.

        The update only applies to a log that is not verified yet, so two
        concurrent verifications cannot overwrite each other.

        Args:
            log_id: The log to verify
            verifier_id: Identity performing the verification

        Returns:
            True if the log transitioned to verified, False otherwise
            (unknown id or already verified)
        """
        pass

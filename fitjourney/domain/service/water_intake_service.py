"""Water intake domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from fitjourney.config import ActivitySettings
from fitjourney.domain.error import ValidationError
from fitjourney.domain.model.water_log import WaterLog
from fitjourney.domain.repository import WaterLogRepository
from fitjourney.domain.value import Email, UserId, WaterLogId

from .base import Service


def start_of_day(moment: datetime | None = None) -> datetime:
    """Midnight UTC of the day containing `moment` (default: now)."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


class WaterIntakeService(Service):
    """Domain service for water intake logs."""

    def __init__(
        self,
        water_log_repository: WaterLogRepository,
        activity_settings: ActivitySettings,
    ) -> None:
        """Initialize water intake service.

        Args:
            water_log_repository: WaterLog repository
            activity_settings: Activity rules
        """
        self.water_log_repository = water_log_repository
        self.activity_settings = activity_settings

    async def log_cups(self, user_id: UserId, user_email: Email, cups: int) -> WaterLog:
        """Record cups of water drunk now.

        Raises:
            ValidationError: If cups is outside 1..max_cups_per_entry
        """
        maximum = self.activity_settings.max_cups_per_entry
        if cups < 1 or cups > maximum:
            raise ValidationError(f"Cups must be between 1 and {maximum}")

        log = WaterLog(
            id=WaterLogId(uuid4()),
            user_id=user_id,
            user_email=user_email,
            cups=cups,
            created_at=datetime.now(timezone.utc),
        )
        await self.water_log_repository.insert(log)
        logfire.info("Water intake logged", user_id=str(user_id), cups=cups)
        return log

    async def daily_total(self, user_id: UserId, day: datetime | None = None) -> int:
        """Sum of cups logged since the start of `day` (UTC, default today)."""
        since = start_of_day(day)
        logs = await self.water_log_repository.list_by_user_since(user_id, since)
        return sum(log.cups for log in logs)

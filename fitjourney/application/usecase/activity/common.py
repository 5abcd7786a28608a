"""Shared response models for activity use cases."""

from datetime import datetime

from pydantic import BaseModel

from fitjourney.domain.model import ActivityLog
from fitjourney.domain.value import HabitType


class ActivityLogResponse(BaseModel):
    """A habit log as returned to callers."""

    log_id: str
    user_id: str
    user_email: str
    habit_type: HabitType
    note: str
    photo_url: str
    verified: bool
    verified_by: str | None
    created_at: datetime

    @classmethod
    def from_log(cls, log: ActivityLog) -> "ActivityLogResponse":
        """Build from a domain log, with ids and email as strings."""
        return cls(
            log_id=str(log.id),
            user_id=str(log.user_id),
            user_email=str(log.user_email),
            habit_type=log.habit_type,
            note=log.note,
            photo_url=log.photo_url,
            verified=log.verified,
            verified_by=str(log.verified_by) if log.verified_by else None,
            created_at=log.created_at,
        )

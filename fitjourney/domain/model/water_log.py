"""WaterLog entity."""

from datetime import datetime, timezone

from pydantic import Field

from fitjourney.domain.model.common import DomainModel
from fitjourney.domain.value import Email, UserId, WaterLogId


class WaterLog(DomainModel):
    """Cups of water drunk, logged by a user at a point in time."""

    id: WaterLogId
    user_id: UserId
    user_email: Email
    cups: int = Field(ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

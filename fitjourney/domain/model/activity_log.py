"""ActivityLog entity.

One user-submitted proof of a completed habit: a category, an optional note
and the public URL of a verification photo. Logs start unverified and are
verified at most once, by any authenticated identity.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from fitjourney.domain.model.common import DomainModel
from fitjourney.domain.value import ActivityLogId, Email, HabitType, UserId


class ActivityLog(DomainModel):
    """Photo-verified habit completion record.

    Business rules:
    - A log always references a stored photo
    - verified=False implies verified_by is None
    - verified=True implies verified_by is set
    """

    id: ActivityLogId
    user_id: UserId
    user_email: Email
    habit_type: HabitType
    note: str = Field(default="", max_length=200)
    photo_url: str = Field(min_length=1)
    verified: bool = False
    verified_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def check_verification_state(self) -> "ActivityLog":
        """Keep `verified` and `verified_by` consistent."""
        if not self.verified and self.verified_by is not None:
            raise ValueError("verified_by must be empty for an unverified log")
        if self.verified and self.verified_by is None:
            raise ValueError("verified_by is required for a verified log")
        return self

"""Domain model entities for FitJourney."""

from fitjourney.domain.model.activity_log import ActivityLog
from fitjourney.domain.model.session import Identity, Session, SignUpProfile
from fitjourney.domain.model.water_log import WaterLog

__all__ = [
    "ActivityLog",
    "Identity",
    "Session",
    "SignUpProfile",
    "WaterLog",
]

"""Repository interfaces for the FitJourney domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from fitjourney.domain.repository.activity_log import ActivityLogRepository
from fitjourney.domain.repository.water_log import WaterLogRepository

__all__ = [
    "ActivityLogRepository",
    "WaterLogRepository",
]

"""PostgreSQL repository implementations."""

from fitjourney.persistence.repository.activity_log import PostgresActivityLogRepository
from fitjourney.persistence.repository.water_log import PostgresWaterLogRepository

__all__ = [
    "PostgresActivityLogRepository",
    "PostgresWaterLogRepository",
]

"""In-memory repository implementations for testing."""

from .activity_log import InMemoryActivityLogRepository
from .water_log import InMemoryWaterLogRepository

__all__ = [
    "InMemoryActivityLogRepository",
    "InMemoryWaterLogRepository",
]

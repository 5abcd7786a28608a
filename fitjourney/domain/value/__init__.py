"""Domain value objects for FitJourney."""

from fitjourney.domain.value.identifiers import (
    ActivityLogId,
    UserId,
    WaterLogId,
)
from fitjourney.domain.value.types import (
    AuthState,
    ContainerPolicy,
    Email,
    FoodItem,
    HabitType,
    ImageConstraints,
    MediaPayload,
    MetricProgress,
    ObjectMetadata,
    SessionEvent,
)

__all__ = [
    # Identifiers
    "UserId",
    "ActivityLogId",
    "WaterLogId",
    # Types
    "AuthState",
    "ContainerPolicy",
    "Email",
    "FoodItem",
    "HabitType",
    "ImageConstraints",
    "MediaPayload",
    "MetricProgress",
    "ObjectMetadata",
    "SessionEvent",
]

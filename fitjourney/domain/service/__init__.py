"""Domain services."""

from .activity_log_service import ActivityLogService
from .base import Service
from .media_service import MediaProcessor
from .session_service import (
    IdentityClient,
    SessionChannel,
    SessionStorage,
    SessionStore,
    Subscription,
)
from .storage_service import MediaStorageService, ObjectStorageGateway, build_object_key
from .tracking_service import ActivityDataProvider, FoodAnalyzer, daily_goal_percentage
from .water_intake_service import WaterIntakeService, start_of_day

__all__ = [
    "ActivityDataProvider",
    "ActivityLogService",
    "FoodAnalyzer",
    "IdentityClient",
    "MediaProcessor",
    "MediaStorageService",
    "ObjectStorageGateway",
    "Service",
    "SessionChannel",
    "SessionStorage",
    "SessionStore",
    "Subscription",
    "WaterIntakeService",
    "build_object_key",
    "daily_goal_percentage",
    "start_of_day",
]

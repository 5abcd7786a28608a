"""Activity log use cases."""

from fitjourney.application.usecase.activity.common import ActivityLogResponse
from fitjourney.application.usecase.activity.list_activity_logs import (
    ListActivityLogsRequest,
    ListActivityLogsResponse,
    ListActivityLogsUseCase,
)
from fitjourney.application.usecase.activity.log_activity import (
    LogActivityRequest,
    LogActivityResponse,
    LogActivityUseCase,
)
from fitjourney.application.usecase.activity.verify_activity_log import (
    VerifyActivityLogRequest,
    VerifyActivityLogUseCase,
)

__all__ = [
    "ActivityLogResponse",
    "ListActivityLogsRequest",
    "ListActivityLogsResponse",
    "ListActivityLogsUseCase",
    "LogActivityRequest",
    "LogActivityResponse",
    "LogActivityUseCase",
    "VerifyActivityLogRequest",
    "VerifyActivityLogUseCase",
]

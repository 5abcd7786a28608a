"""List activity logs use case."""

from pydantic import BaseModel, Field

from fitjourney.application.usecase.activity.common import ActivityLogResponse
from fitjourney.application.usecase.base import BaseUseCase, parse_uuid
from fitjourney.domain.service import ActivityLogService
from fitjourney.domain.value import UserId


class ListActivityLogsRequest(BaseModel):
    """Request to list a user's habit logs."""

    user_id: str
    limit: int | None = Field(default=None, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListActivityLogsResponse(BaseModel):
    """A user's habit logs, newest first."""

    items: list[ActivityLogResponse]


class ListActivityLogsUseCase(BaseUseCase):
    """Use case for listing a user's habit logs."""

    def __init__(self, activity_log_service: ActivityLogService) -> None:
        self.activity_log_service = activity_log_service

    async def execute(
        self, request: ListActivityLogsRequest
    ) -> ListActivityLogsResponse:
        """List logs ordered by creation time, newest first."""
        user_id = UserId(parse_uuid(request.user_id, "user id"))
        logs = await self.activity_log_service.list_for_user(
            user_id, limit=request.limit, offset=request.offset
        )
        return ListActivityLogsResponse(
            items=[ActivityLogResponse.from_log(log) for log in logs]
        )

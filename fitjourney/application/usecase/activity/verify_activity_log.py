"""Verify activity log use case."""

from pydantic import BaseModel

from fitjourney.application.usecase.activity.common import ActivityLogResponse
from fitjourney.application.usecase.base import BaseUseCase, parse_uuid
from fitjourney.domain.service import ActivityLogService
from fitjourney.domain.value import ActivityLogId, UserId


class VerifyActivityLogRequest(BaseModel):
    """Request to verify a habit log."""

    log_id: str
    verifier_id: str


class VerifyActivityLogUseCase(BaseUseCase):
    """Use case for verifying a habit log.

    Verification is one-way: once verified, a log stays verified and keeps
    its first verifier.
    """

    def __init__(self, activity_log_service: ActivityLogService) -> None:
        """Initialize use case.

        Args:
            activity_log_service: Habit log domain service
        """
        self.activity_log_service = activity_log_service

    async def execute(self, request: VerifyActivityLogRequest) -> ActivityLogResponse:
        """Execute verify use case.

        Args:
            request: Verification request

        Returns:
            The log after verification

        Raises:
            ValidationError: If an identifier is malformed
            NotFoundError: If the log does not exist
            BusinessRuleViolationError: If self-verification is disabled
        """
        log_id = ActivityLogId(parse_uuid(request.log_id, "habit log id"))
        verifier_id = UserId(parse_uuid(request.verifier_id, "verifier id"))

        log = await self.activity_log_service.mark_verified(log_id, verifier_id)
        return ActivityLogResponse.from_log(log)

"""Log water intake use case."""

from datetime import datetime

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fitjourney.application.usecase.base import BaseUseCase, parse_uuid
from fitjourney.domain.error import ValidationError
from fitjourney.domain.service import WaterIntakeService
from fitjourney.domain.value import Email, UserId


class LogWaterIntakeRequest(BaseModel):
    """Request to log cups of water."""

    user_id: str
    user_email: str
    cups: int


class LogWaterIntakeResponse(BaseModel):
    """Response after logging water intake."""

    log_id: str
    cups: int
    daily_total: int
    created_at: datetime


class LogWaterIntakeUseCase(BaseUseCase):
    """Use case for logging water intake."""

    def __init__(self, water_intake_service: WaterIntakeService) -> None:
        self.water_intake_service = water_intake_service

    async def execute(self, request: LogWaterIntakeRequest) -> LogWaterIntakeResponse:
        """Write one entry and return today's running total.

        Raises:
            ValidationError: If cups is out of range or an identifier is malformed
        """
        user_id = UserId(parse_uuid(request.user_id, "user id"))
        try:
            email = Email(request.user_email)
        except PydanticValidationError:
            raise ValidationError("Please enter a valid email")

        log = await self.water_intake_service.log_cups(user_id, email, request.cups)
        total = await self.water_intake_service.daily_total(user_id, log.created_at)

        return LogWaterIntakeResponse(
            log_id=str(log.id),
            cups=log.cups,
            daily_total=total,
            created_at=log.created_at,
        )

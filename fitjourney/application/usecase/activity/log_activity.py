"""Log activity use case.

Turns a captured photo into a stored, unverified habit log:
process the photo, upload it, then insert the log row.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fitjourney.application.usecase.base import BaseUseCase, parse_uuid
from fitjourney.config import ActivitySettings, MediaSettings
from fitjourney.domain.error import (
    ActivityLoggingError,
    DomainError,
    LoggingStage,
    UnexpectedError,
    ValidationError,
)
from fitjourney.domain.service import (
    ActivityLogService,
    MediaProcessor,
    MediaStorageService,
)
from fitjourney.domain.value import Email, HabitType, ImageConstraints, UserId


class LogActivityRequest(BaseModel):
    """Request to log a habit with a verification photo."""

    user_id: str
    user_email: str
    habit_type: str | None = None
    note: str | None = None
    photo_local_ref: str | None = None


class LogActivityResponse(BaseModel):
    """Response after logging a habit."""

    log_id: str
    habit_type: HabitType
    photo_url: str
    verified: bool
    created_at: datetime


@contextmanager
def logging_stage(stage: LoggingStage) -> Iterator[None]:
    """Run one workflow stage, tagging any failure with the stage."""
    with logfire.span("log_activity.{stage}", stage=stage.value):
        try:
            yield
        except DomainError as e:
            logfire.warn("Log activity stage failed", stage=stage.value, error=str(e))
            raise ActivityLoggingError(stage, e) from e
        except Exception as e:
            logfire.error(
                "Unexpected error in log activity stage",
                stage=stage.value,
                error=str(e),
            )
            raise ActivityLoggingError(stage, UnexpectedError(str(e))) from e


class LogActivityUseCase(BaseUseCase):
    """Use case for logging a photo-verified habit."""

    def __init__(
        self,
        media_processor: MediaProcessor,
        media_storage_service: MediaStorageService,
        activity_log_service: ActivityLogService,
        media_settings: MediaSettings,
        activity_settings: ActivitySettings,
    ) -> None:
        """Initialize use case.

        Args:
            media_processor: Image downsizing and encoding
            media_storage_service: Photo storage
            activity_log_service: Habit log domain service
            media_settings: Image constraints
            activity_settings: Activity rules
        """
        self.media_processor = media_processor
        self.media_storage_service = media_storage_service
        self.activity_log_service = activity_log_service
        self.media_settings = media_settings
        self.activity_settings = activity_settings

    async def execute(self, request: LogActivityRequest) -> LogActivityResponse:
        """Execute log activity use case.

        Input is validated before any I/O. A failure after validation is
        raised as ActivityLoggingError naming the failed stage; a photo
        uploaded before a failed insert is left in storage.

        Args:
            request: Log activity request

        Returns:
            The stored log's id, photo URL and creation time

        Raises:
            ValidationError: If required input is missing or malformed
            ActivityLoggingError: If processing, upload or insert fails
        """
        user_id, email, habit_type, note = self._validate(request)

        with logfire.span(
            "log_activity", user_id=str(user_id), habit_type=habit_type.value
        ):
            with logging_stage(LoggingStage.PROCESS_PHOTO):
                payload = await self.media_processor.process(
                    request.photo_local_ref,
                    ImageConstraints.verification_photo(
                        max_width=self.media_settings.verification_max_width,
                        quality=self.media_settings.quality,
                    ),
                )

            with logging_stage(LoggingStage.UPLOAD_PHOTO):
                photo_url = await self.media_storage_service.store(
                    email, habit_type, payload
                )

            with logging_stage(LoggingStage.SAVE_LOG):
                log = await self.activity_log_service.record(
                    user_id=user_id,
                    user_email=email,
                    habit_type=habit_type,
                    photo_url=photo_url,
                    note=note,
                )

            logfire.info("Habit logged", log_id=str(log.id))

            return LogActivityResponse(
                log_id=str(log.id),
                habit_type=log.habit_type,
                photo_url=log.photo_url,
                verified=log.verified,
                created_at=log.created_at,
            )

    def _validate(
        self, request: LogActivityRequest
    ) -> tuple[UserId, Email, HabitType, str]:
        if not request.habit_type:
            raise ValidationError("Please select a habit to log.")
        if not request.photo_local_ref or not request.photo_local_ref.strip():
            raise ValidationError("Please upload a photo to verify your habit.")

        try:
            habit_type = HabitType(request.habit_type)
        except ValueError:
            raise ValidationError(f"Unknown habit type: {request.habit_type}")

        note = (request.note or "").strip()
        if len(note) > self.activity_settings.note_max_length:
            raise ValidationError(
                f"Note must be at most {self.activity_settings.note_max_length} characters"
            )

        try:
            email = Email(request.user_email)
        except PydanticValidationError:
            raise ValidationError("Please enter a valid email")

        user_id = UserId(parse_uuid(request.user_id, "user id"))
        return user_id, email, habit_type, note

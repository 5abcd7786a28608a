"""ActivityLog domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from fitjourney.config import ActivitySettings
from fitjourney.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
)
from fitjourney.domain.model.activity_log import ActivityLog
from fitjourney.domain.repository import ActivityLogRepository
from fitjourney.domain.value import ActivityLogId, Email, HabitType, UserId

from .base import Service


class ActivityLogService(Service):
    """Domain service for habit log operations."""

    def __init__(
        self,
        activity_log_repository: ActivityLogRepository,
        activity_settings: ActivitySettings,
    ) -> None:
        """Initialize activity log service.

        Args:
            activity_log_repository: ActivityLog repository
            activity_settings: Activity rules
        """
        self.activity_log_repository = activity_log_repository
        self.activity_settings = activity_settings

    async def record(
        self,
        user_id: UserId,
        user_email: Email,
        habit_type: HabitType | None,
        photo_url: str | None,
        note: str | None = None,
    ) -> ActivityLog:
        """Create a new, unverified log.

        All preconditions are checked before the repository is touched.

        Args:
            user_id: Owner of the log
            user_email: Owner's current email
            habit_type: Habit category
            photo_url: Public URL of the verification photo
            note: Optional free text

        Returns:
            The stored log

        Raises:
            ValidationError: If the habit type or photo URL is missing, or
                the note is too long
        """
        if not habit_type:
            raise ValidationError("Please select a habit to log.")
        if not photo_url or not photo_url.strip():
            raise ValidationError("Please upload a photo to verify your habit.")

        note = (note or "").strip()
        if len(note) > self.activity_settings.note_max_length:
            raise ValidationError(
                f"Note must be at most {self.activity_settings.note_max_length} characters"
            )

        try:
            log = ActivityLog(
                id=ActivityLogId(uuid4()),
                user_id=user_id,
                user_email=user_email,
                habit_type=habit_type,
                note=note,
                photo_url=photo_url.strip(),
                verified=False,
                verified_by=None,
                created_at=datetime.now(timezone.utc),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid habit log: {e.errors()[0]['msg']}")

        with logfire.span(
            "activity_log.record", user_id=str(user_id), habit_type=log.habit_type.value
        ):
            await self.activity_log_repository.insert(log)
            logfire.info("Habit log recorded", log_id=str(log.id))
            return log

    async def get_log(self, log_id: ActivityLogId) -> ActivityLog:
        """Get a log by ID.

        Raises:
            NotFoundError: If the log does not exist
        """
        log = await self.activity_log_repository.find_by_id(log_id)
        if log is None:
            raise NotFoundError("Habit log", str(log_id))
        return log

    async def list_for_user(
        self, user_id: UserId, limit: int | None = None, offset: int = 0
    ) -> list[ActivityLog]:
        """List a user's logs, newest first."""
        return await self.activity_log_repository.list_by_user(
            user_id, limit=limit, offset=offset
        )

    async def mark_verified(
        self, log_id: ActivityLogId, verifier_id: UserId
    ) -> ActivityLog:
        """Mark a log as verified by `verifier_id`.

        Verifying an already verified log changes nothing: the first
        verifier is kept and the stored log is returned.

        Args:
            log_id: The log to verify
            verifier_id: Identity performing the verification

        Returns:
            The log after verification

        Raises:
            NotFoundError: If the log does not exist
            BusinessRuleViolationError: If self-verification is disabled and
                the verifier owns the log
        """
        with logfire.span(
            "activity_log.mark_verified",
            log_id=str(log_id),
            verifier_id=str(verifier_id),
        ):
            log = await self.get_log(log_id)

            if (
                not self.activity_settings.allow_self_verification
                and log.user_id == verifier_id
            ):
                logfire.warn("Self-verification rejected", log_id=str(log_id))
                raise BusinessRuleViolationError("You cannot verify your own habit log")

            if log.verified:
                logfire.info(
                    "Habit log already verified",
                    log_id=str(log_id),
                    verified_by=str(log.verified_by),
                )
                return log

            transitioned = await self.activity_log_repository.mark_verified(
                log_id, verifier_id
            )
            if transitioned:
                logfire.info("Habit log verified", log_id=str(log_id))

            # Re-read: a concurrent verifier may have won the update
            return await self.get_log(log_id)

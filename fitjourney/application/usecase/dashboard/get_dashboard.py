"""Get dashboard use case.

Collects today's activity readings, water total and recent habit logs
and scores them against the daily goals.
"""

import asyncio

import logfire
from pydantic import BaseModel, Field

from fitjourney.application.usecase.activity.common import ActivityLogResponse
from fitjourney.application.usecase.base import BaseUseCase, parse_uuid
from fitjourney.config import GoalSettings
from fitjourney.domain.service import (
    ActivityDataProvider,
    ActivityLogService,
    WaterIntakeService,
    daily_goal_percentage,
)
from fitjourney.domain.model import ActivityLog
from fitjourney.domain.value import MetricProgress, UserId


class GetDashboardRequest(BaseModel):
    """Request for a user's dashboard."""

    user_id: str
    recent_logs_limit: int = Field(default=5, ge=0, le=50)


class MetricItem(BaseModel):
    """A metric with its goal and progress."""

    value: int
    goal: int
    percentage: int

    @classmethod
    def from_progress(cls, progress: MetricProgress) -> "MetricItem":
        """Build from a metric's progress, rounding the percentage."""
        return cls(
            value=progress.value,
            goal=progress.goal,
            percentage=round(progress.percentage),
        )


class GetDashboardResponse(BaseModel):
    """Today's progress for one user."""

    steps: MetricItem
    calories: MetricItem
    active_minutes: MetricItem
    water_cups: MetricItem
    daily_goal_percentage: int
    recent_logs: list[ActivityLogResponse]


class GetDashboardUseCase(BaseUseCase):
    """Use case for refreshing the dashboard."""

    def __init__(
        self,
        activity_data_provider: ActivityDataProvider,
        water_intake_service: WaterIntakeService,
        activity_log_service: ActivityLogService,
        goal_settings: GoalSettings,
    ) -> None:
        """Initialize use case.

        Args:
            activity_data_provider: Source of step, calorie and minute readings
            water_intake_service: Water intake domain service
            activity_log_service: Habit log domain service
            goal_settings: Daily goals
        """
        self.activity_data_provider = activity_data_provider
        self.water_intake_service = water_intake_service
        self.activity_log_service = activity_log_service
        self.goal_settings = goal_settings

    async def execute(self, request: GetDashboardRequest) -> GetDashboardResponse:
        """Execute dashboard refresh.

        The activity readings are fetched concurrently with the stored
        data. If any of them fails the whole refresh fails with that error.
        """
        user_id = UserId(parse_uuid(request.user_id, "user id"))

        with logfire.span("get_dashboard", user_id=str(user_id)):
            steps, calories, active_minutes, (water_cups, logs) = await asyncio.gather(
                self.activity_data_provider.get_steps(),
                self.activity_data_provider.get_calories_burned(),
                self.activity_data_provider.get_active_minutes(),
                self._read_stored(user_id, request.recent_logs_limit),
            )

            goals = self.goal_settings
            metrics = [
                MetricProgress(value=max(0, steps), goal=goals.steps),
                MetricProgress(value=max(0, calories), goal=goals.calories),
                MetricProgress(value=max(0, active_minutes), goal=goals.active_minutes),
                MetricProgress(value=max(0, water_cups), goal=goals.water_cups),
            ]

            return GetDashboardResponse(
                steps=MetricItem.from_progress(metrics[0]),
                calories=MetricItem.from_progress(metrics[1]),
                active_minutes=MetricItem.from_progress(metrics[2]),
                water_cups=MetricItem.from_progress(metrics[3]),
                daily_goal_percentage=daily_goal_percentage(metrics),
                recent_logs=[ActivityLogResponse.from_log(log) for log in logs],
            )

    async def _read_stored(
        self, user_id: UserId, limit: int
    ) -> tuple[int, list[ActivityLog]]:
        # Both repositories share the request's session, which allows one
        # operation at a time.
        water_cups = await self.water_intake_service.daily_total(user_id)
        logs = await self.activity_log_service.list_for_user(user_id, limit=limit)
        return water_cups, logs

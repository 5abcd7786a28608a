"""Unit tests for water logging and the dashboard."""

from uuid import uuid4

import pytest

from fitjourney.application.usecase.dashboard import (
    GetDashboardRequest,
    GetDashboardUseCase,
)
from fitjourney.application.usecase.water import (
    LogWaterIntakeRequest,
    LogWaterIntakeUseCase,
)
from fitjourney.config import GoalSettings
from fitjourney.domain.error import UnexpectedError, ValidationError
from fitjourney.domain.repository import ActivityLogRepository
from fitjourney.domain.service import (
    ActivityDataProvider,
    ActivityLogService,
    WaterIntakeService,
)
from fitjourney.domain.value import UserId
from tests.conftest import make_log
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class FixedActivityData(ActivityDataProvider):
    """Activity readings fixed for the test."""

    def __init__(self, steps: int, calories: int, minutes: int) -> None:
        self.steps = steps
        self.calories = calories
        self.minutes = minutes

    async def get_steps(self) -> int:
        return self.steps

    async def get_calories_burned(self) -> int:
        return self.calories

    async def get_active_minutes(self) -> int:
        return self.minutes


class BrokenActivityData(FixedActivityData):
    async def get_steps(self) -> int:
        raise UnexpectedError("sensor unavailable")


class TestLogWaterIntake:
    """Tests for LogWaterIntakeUseCase."""

    @pytest.mark.asyncio
    async def test_returns_running_total(self, unit_env):
        """Each entry should report today's running total."""
        use_case = await unit_env.get(LogWaterIntakeUseCase)
        user_id = str(uuid4())

        first = await use_case.execute(
            LogWaterIntakeRequest(user_id=user_id, user_email="a@x.com", cups=2)
        )
        second = await use_case.execute(
            LogWaterIntakeRequest(user_id=user_id, user_email="a@x.com", cups=1)
        )

        assert (first.cups, first.daily_total) == (2, 2)
        assert (second.cups, second.daily_total) == (1, 3)

    @pytest.mark.asyncio
    async def test_zero_cups_rejected(self, unit_env):
        use_case = await unit_env.get(LogWaterIntakeUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                LogWaterIntakeRequest(user_id=str(uuid4()), user_email="a@x.com", cups=0)
            )


class TestGetDashboard:
    """Tests for GetDashboardUseCase."""

    async def _build(self, unit_env, data: ActivityDataProvider) -> GetDashboardUseCase:
        return GetDashboardUseCase(
            activity_data_provider=data,
            water_intake_service=await unit_env.get(WaterIntakeService),
            activity_log_service=await unit_env.get(ActivityLogService),
            goal_settings=GoalSettings(),
        )

    @pytest.mark.asyncio
    async def test_scores_metrics_against_goals(self, unit_env):
        """Metrics and the overall score should reflect the daily goals."""
        user_id = UserId(uuid4())
        water = await unit_env.get(WaterIntakeService)
        repo = await unit_env.get(ActivityLogRepository)
        await water.log_cups(user_id, make_log(user_id).user_email, 4)
        for _ in range(7):
            await repo.insert(make_log(user_id))
        use_case = await self._build(
            unit_env, FixedActivityData(steps=12000, calories=250, minutes=15)
        )

        response = await use_case.execute(GetDashboardRequest(user_id=str(user_id)))

        assert (response.steps.value, response.steps.percentage) == (12000, 100)
        assert response.calories.percentage == 50
        assert response.active_minutes.percentage == 25
        assert (response.water_cups.value, response.water_cups.percentage) == (4, 50)
        # (100 + 50 + 25 + 50) / 4
        assert response.daily_goal_percentage == 56
        assert len(response.recent_logs) == 5

    @pytest.mark.asyncio
    async def test_source_failure_fails_refresh(self, unit_env):
        """If any source fails, the whole refresh fails."""
        use_case = await self._build(unit_env, BrokenActivityData(0, 0, 0))

        with pytest.raises(UnexpectedError, match="sensor"):
            await use_case.execute(GetDashboardRequest(user_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_wired_with_simulated_data(self, unit_env):
        """The container's dashboard should work with simulated readings."""
        use_case = await unit_env.get(GetDashboardUseCase)

        response = await use_case.execute(GetDashboardRequest(user_id=str(uuid4())))

        assert 0 <= response.daily_goal_percentage <= 100
        assert response.water_cups.value == 0
        assert response.recent_logs == []

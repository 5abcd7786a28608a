"""Dashboard refresh over the SQL repositories sharing one session."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from fitjourney.application.usecase.dashboard import (
    GetDashboardRequest,
    GetDashboardUseCase,
)
from fitjourney.config import ActivitySettings, GoalSettings
from fitjourney.domain.model import WaterLog
from fitjourney.domain.service import (
    ActivityDataProvider,
    ActivityLogService,
    WaterIntakeService,
)
from fitjourney.domain.value import Email, UserId, WaterLogId
from fitjourney.persistence.repository import (
    PostgresActivityLogRepository,
    PostgresWaterLogRepository,
)
from tests.conftest import make_log


class SteadyActivityData(ActivityDataProvider):
    async def get_steps(self) -> int:
        return 5000

    async def get_calories_burned(self) -> int:
        return 250

    async def get_active_minutes(self) -> int:
        return 30


@pytest.mark.asyncio
async def test_refresh_on_cold_connection_pool(db_session):
    """Stored reads share the session and must not overlap on it."""
    user_id = UserId(uuid4())
    now = datetime.now(timezone.utc)
    activity_repo = PostgresActivityLogRepository(db_session)
    water_repo = PostgresWaterLogRepository(db_session)

    older = make_log(user_id, created_at=now - timedelta(minutes=5))
    newer = make_log(user_id, created_at=now)
    await activity_repo.insert(older)
    await activity_repo.insert(newer)
    await water_repo.insert(
        WaterLog(
            id=WaterLogId(uuid4()),
            user_id=user_id,
            user_email=Email("a@x.com"),
            cups=4,
            created_at=now,
        )
    )
    await db_session.commit()
    # The first read of the refresh has to check out a fresh connection
    await db_session.bind.dispose()

    settings = ActivitySettings()
    use_case = GetDashboardUseCase(
        activity_data_provider=SteadyActivityData(),
        water_intake_service=WaterIntakeService(water_repo, settings),
        activity_log_service=ActivityLogService(activity_repo, settings),
        goal_settings=GoalSettings(),
    )

    response = await use_case.execute(GetDashboardRequest(user_id=str(user_id)))

    assert response.steps.value == 5000
    assert response.water_cups.value == 4
    assert response.water_cups.percentage == 50
    assert [log.log_id for log in response.recent_logs] == [
        str(newer.id),
        str(older.id),
    ]

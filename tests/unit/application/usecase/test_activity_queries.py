"""Unit tests for listing and verifying habit logs."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from fitjourney.application.usecase.activity import (
    ListActivityLogsRequest,
    ListActivityLogsUseCase,
    VerifyActivityLogRequest,
    VerifyActivityLogUseCase,
)
from fitjourney.domain.error import NotFoundError, ValidationError
from fitjourney.domain.repository import ActivityLogRepository
from fitjourney.domain.value import HabitType, UserId
from tests.conftest import make_log
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListActivityLogs:
    """Tests for ListActivityLogsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_paging(self, unit_env):
        """Logs should be listed newest first, honouring limit and offset."""
        use_case = await unit_env.get(ListActivityLogsUseCase)
        repo = await unit_env.get(ActivityLogRepository)
        user_id = UserId(uuid4())
        now = datetime.now(timezone.utc)
        logs = [
            make_log(user_id, habit_type=habit, created_at=now - timedelta(hours=i))
            for i, habit in enumerate(
                [HabitType.SLEEP, HabitType.BREAKFAST, HabitType.LUNCH]
            )
        ]
        for log in reversed(logs):
            await repo.insert(log)

        response = await use_case.execute(ListActivityLogsRequest(user_id=str(user_id)))
        page = await use_case.execute(
            ListActivityLogsRequest(user_id=str(user_id), limit=1, offset=1)
        )

        assert [item.log_id for item in response.items] == [str(log.id) for log in logs]
        assert [item.habit_type for item in page.items] == [HabitType.BREAKFAST]

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, unit_env):
        use_case = await unit_env.get(ListActivityLogsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(ListActivityLogsRequest(user_id="abc"))


class TestVerifyActivityLog:
    """Tests for VerifyActivityLogUseCase."""

    @pytest.mark.asyncio
    async def test_verify_and_verify_again(self, unit_env):
        """A second verification should keep the first verifier."""
        use_case = await unit_env.get(VerifyActivityLogUseCase)
        repo = await unit_env.get(ActivityLogRepository)
        log = make_log(UserId(uuid4()))
        await repo.insert(log)
        first, second = str(uuid4()), str(uuid4())

        response = await use_case.execute(
            VerifyActivityLogRequest(log_id=str(log.id), verifier_id=first)
        )
        again = await use_case.execute(
            VerifyActivityLogRequest(log_id=str(log.id), verifier_id=second)
        )

        assert response.verified is True
        assert response.verified_by == first
        assert again.verified_by == first

    @pytest.mark.asyncio
    async def test_unknown_log(self, unit_env):
        use_case = await unit_env.get(VerifyActivityLogUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                VerifyActivityLogRequest(log_id=str(uuid4()), verifier_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_malformed_log_id(self, unit_env):
        use_case = await unit_env.get(VerifyActivityLogUseCase)

        with pytest.raises(ValidationError, match="habit log id"):
            await use_case.execute(
                VerifyActivityLogRequest(log_id="42", verifier_id=str(uuid4()))
            )

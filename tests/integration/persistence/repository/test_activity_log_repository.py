"""Integration tests for PostgresActivityLogRepository."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from fitjourney.domain.value import ActivityLogId, HabitType, UserId
from fitjourney.persistence.repository import PostgresActivityLogRepository
from fitjourney.persistence.tables import habit_logs_table
from tests.conftest import make_log


class TestPostgresActivityLogRepository:
    """Tests against a real SQL database."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, db_session):
        """A stored log should read back unchanged."""
        repo = PostgresActivityLogRepository(db_session)
        log = make_log(UserId(uuid4()), habit_type=HabitType.NO_SMOKING, note="day 3")

        await repo.insert(log)
        found = await repo.find_by_id(log.id)

        assert found == log
        assert found.created_at.tzinfo is not None
        assert await repo.find_by_id(ActivityLogId(uuid4())) is None

    @pytest.mark.asyncio
    async def test_list_by_user_newest_first(self, db_session):
        """Listing should be per user, newest first, with limit and offset."""
        repo = PostgresActivityLogRepository(db_session)
        user_id = UserId(uuid4())
        now = datetime.now(timezone.utc)
        oldest = make_log(user_id, created_at=now - timedelta(days=2))
        middle = make_log(user_id, created_at=now - timedelta(days=1))
        newest = make_log(user_id, created_at=now)
        for log in (middle, newest, oldest):
            await repo.insert(log)
        await repo.insert(make_log(UserId(uuid4())))

        assert [log.id for log in await repo.list_by_user(user_id)] == [
            newest.id,
            middle.id,
            oldest.id,
        ]
        assert [
            log.id for log in await repo.list_by_user(user_id, limit=1, offset=1)
        ] == [middle.id]

    @pytest.mark.asyncio
    async def test_mark_verified_only_once(self, db_session):
        """Only the first verification should update the row."""
        repo = PostgresActivityLogRepository(db_session)
        log = make_log(UserId(uuid4()))
        await repo.insert(log)
        first, second = UserId(uuid4()), UserId(uuid4())

        assert await repo.mark_verified(log.id, first) is True
        assert await repo.mark_verified(log.id, second) is False

        stored = await repo.find_by_id(log.id)
        assert stored.verified is True
        assert stored.verified_by == first

    @pytest.mark.asyncio
    async def test_mark_verified_missing_log(self, db_session):
        repo = PostgresActivityLogRepository(db_session)

        assert await repo.mark_verified(ActivityLogId(uuid4()), UserId(uuid4())) is False

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, db_session):
        repo = PostgresActivityLogRepository(db_session)
        log = make_log(UserId(uuid4()))
        await repo.insert(log)

        with pytest.raises(IntegrityError):
            await repo.insert(log)

    @pytest.mark.asyncio
    async def test_verification_columns_must_agree(self, db_session):
        """The table rejects a verified row without a verifier."""
        stmt = insert(habit_logs_table).values(
            id=uuid4(),
            user_id=uuid4(),
            user_email="a@x.com",
            habit_type="sleep",
            note="",
            photo_url="https://example.test/a.jpg",
            verified=True,
            verified_by=None,
            created_at=datetime.now(timezone.utc),
        )

        with pytest.raises(IntegrityError):
            await db_session.execute(stmt)

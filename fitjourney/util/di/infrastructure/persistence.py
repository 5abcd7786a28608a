"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fitjourney.config import Settings
from fitjourney.domain.repository import ActivityLogRepository, WaterLogRepository
from fitjourney.persistence.database import (
    create_engine,
    create_session_factory,
    finish_transaction,
)
from fitjourney.persistence.repository import (
    PostgresActivityLogRepository,
    PostgresWaterLogRepository,
)
from fitjourney.util.di.base import ProviderBase
from fitjourney.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            # dishka sends the request's exception (or None) back in
            error = yield session
            await finish_transaction(session, error)

    @provide(scope=Scope.REQUEST)
    def get_activity_log_repository(
        self, session: AsyncSession
    ) -> ActivityLogRepository:
        """Provide ActivityLog repository."""
        return PostgresActivityLogRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_water_log_repository(self, session: AsyncSession) -> WaterLogRepository:
        """Provide WaterLog repository."""
        return PostgresWaterLogRepository(session)

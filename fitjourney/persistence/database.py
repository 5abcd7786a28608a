"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fitjourney.config import Settings
from fitjourney.domain.error import PersistenceError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )



async def finish_transaction(session: AsyncSession, error: BaseException | None) -> None:
    """End a request's transaction.

    Commits when the request finished cleanly and rolls back when it raised.

    Args:
        session: The request's session
        error: Exception raised by the request, if any

    Raises:
        PersistenceError: If the commit fails
    """
    if error is not None:
        logfire.warn("Session rollback", error=str(error))
        await session.rollback()
        return

    try:
        await session.commit()
    except SQLAlchemyError as e:
        logfire.error("Session commit failed", error=str(e))
        await session.rollback()
        raise PersistenceError("Could not save changes") from e
    logfire.info("Session committed")

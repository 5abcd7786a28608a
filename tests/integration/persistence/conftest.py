"""Fixtures for repository integration tests.

The tables use generic column types, so the repositories run against a
throwaway SQLite database here and against PostgreSQL in production.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from fitjourney.persistence.tables import metadata


@pytest_asyncio.fixture
async def db_session(tmp_path):
    """Session bound to a fresh database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fitjourney.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()

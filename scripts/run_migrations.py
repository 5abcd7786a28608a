#!/usr/bin/env python3
"""Upgrade the database schema to head, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from fitjourney.config import Settings
from fitjourney.util.observability import configure_logfire


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", environment=settings.environment)
        command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy step fails instead of running on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())

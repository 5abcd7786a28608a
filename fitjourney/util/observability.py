"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Habit logged", log_id=str(log.id), habit_type=log.habit_type.value)

    # Manual spans around remote calls and workflow stages
    with logfire.span("storage.upload", container=container, key=key):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from fitjourney.config import Settings

SCRUBBED_PATTERNS = ["access_token", "refresh_token", "apikey", "anon_key"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN to enable cloud sending
    - OBSERVABILITY__SEND_TO_LOGFIRE overrides the token-based default

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "fitjourney-client",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        # Session tokens and the anon key never leave the client in telemetry
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=SCRUBBED_PATTERNS),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx requests (auth and storage backends)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")

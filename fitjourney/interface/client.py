"""Client entry point.

The presentation layer creates one container per process and runs each user
action in its own request scope: repositories share one database
transaction which is committed when the action succeeds.

Usage:
    container = create_client()
    store = await container.get(SessionStore)
    session = await store.sign_in("a@x.com", "secret1")

    response = await perform(
        container,
        LogActivityUseCase,
        LogActivityRequest(
            user_id=str(session.identity.user_id),
            user_email=str(session.identity.email),
            habit_type="exercise",
            photo_local_ref="/tmp/run.jpg",
        ),
    )
"""

from typing import Any, TypeVar

from dishka import AsyncContainer
from dishka.exceptions import ExitError

from fitjourney.application.usecase.activity import LogActivityUseCase
from fitjourney.application.usecase.base import BaseUseCase
from fitjourney.config import Settings
from fitjourney.domain.error import (
    ActivityLoggingError,
    DomainError,
    LoggingStage,
    PersistenceError,
)
from fitjourney.util.di.container import create_container
from fitjourney.util.logging import setup_logging
from fitjourney.util.observability import configure_logfire, instrument_httpx

UseCaseT = TypeVar("UseCaseT", bound=BaseUseCase)


def create_client(settings: Settings | None = None) -> AsyncContainer:
    """Configure logging and observability, then build the container.

    Args:
        settings: Settings used for logging setup (loaded from environment
            when omitted)

    Returns:
        Production DI container
    """
    settings = settings or Settings()
    setup_logging(settings)
    configure_logfire(settings)
    # Logfire must be configured before instrumentation
    instrument_httpx()
    return create_container()


async def perform(
    container: AsyncContainer, use_case_type: type[UseCaseT], request: Any
) -> Any:
    """Run one use case inside its own request scope.

    Args:
        container: App container
        use_case_type: Use case class to resolve
        request: Request model passed to `execute`

    Returns:
        The use case response

    Raises:
        DomainError: Raised by the use case, or by closing the request scope.
            A failed commit of a habit log is reported as the SAVE_LOG stage.
    """
    try:
        async with container() as request_container:
            use_case = await request_container.get(use_case_type)
            response = await use_case.execute(request)
    except ExitError as e:
        error = next((err for err in e.exceptions if isinstance(err, DomainError)), None)
        if error is None:
            raise
        if isinstance(error, PersistenceError) and issubclass(
            use_case_type, LogActivityUseCase
        ):
            raise ActivityLoggingError(LoggingStage.SAVE_LOG, error) from error
        raise error
    return response

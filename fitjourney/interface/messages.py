"""User-facing error messages.

The presentation layer shows one sentence per failure. Messages never
carry stack traces, identifiers or backend internals.
"""

from fitjourney.domain.error import (
    ActivityLoggingError,
    AuthError,
    AuthTimeoutError,
    BusinessRuleViolationError,
    LoggingStage,
    MediaError,
    NotFoundError,
    PersistenceError,
    StorageError,
    UnexpectedError,
    ValidationError,
)
from fitjourney.util.logging import get_logger

logger = get_logger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again."

STAGE_MESSAGES = {
    LoggingStage.PROCESS_PHOTO: "We couldn't process your photo. Please try another one.",
    LoggingStage.UPLOAD_PHOTO: "We couldn't upload your photo. Please check your connection and try again.",
    LoggingStage.SAVE_LOG: "We couldn't save your habit log. Please try again.",
}


def user_message(exc: BaseException) -> str:
    """Map an exception to a message suitable for display.

    Args:
        exc: Any exception raised by a use case or the session store

    Returns:
        One human-readable sentence
    """
    if isinstance(exc, ActivityLoggingError):
        if isinstance(exc.cause, ValidationError):
            return str(exc.cause)
        return STAGE_MESSAGES[exc.stage]

    # Validation messages are written for users already
    if isinstance(exc, ValidationError):
        return str(exc)

    if isinstance(exc, AuthTimeoutError):
        return "The request timed out. Please check your connection and try again."

    if isinstance(exc, AuthError):
        return str(exc) or "Authentication failed."

    if isinstance(exc, BusinessRuleViolationError):
        return str(exc)

    if isinstance(exc, NotFoundError):
        return f"{exc.resource} not found."

    if isinstance(exc, MediaError):
        return "We couldn't process your photo. Please try another one."

    if isinstance(exc, StorageError):
        return "We couldn't upload your photo. Please check your connection and try again."

    if isinstance(exc, PersistenceError):
        return "We couldn't save your changes. Please try again."

    if not isinstance(exc, UnexpectedError):
        logger.error(f"Unhandled {type(exc).__name__}: {exc}")
    return GENERIC_MESSAGE

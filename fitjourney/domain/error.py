"""Domain layer errors."""

from enum import Enum


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed input, raised before any I/O."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AuthError(DomainError):
    """Credential or session rejected by the identity backend."""

    pass


class AuthTimeoutError(DomainError):
    """The identity backend did not answer within the allowed time."""

    def __init__(self, operation: str, timeout_seconds: float):
        self.operation = operation
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{operation} timed out after {timeout_seconds:g}s")


class MediaError(DomainError):
    """An image could not be read, decoded or encoded."""

    pass


class StorageError(DomainError):
    """Container, upload or public URL resolution failure."""

    pass


class PersistenceError(DomainError):
    """Stored changes could not be committed."""

    pass


class UnexpectedError(DomainError):
    """Unanticipated transport or parse failure."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class LoggingStage(str, Enum):
    """Stages of the log-activity workflow."""

    PROCESS_PHOTO = "process_photo"
    UPLOAD_PHOTO = "upload_photo"
    SAVE_LOG = "save_log"


class ActivityLoggingError(DomainError):
    """A stage of the log-activity workflow failed.

    Attributes:
        stage: The stage that failed
        cause: The domain error raised by that stage
    """

    def __init__(self, stage: LoggingStage, cause: DomainError):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage.value} failed: {cause}")

"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class TokenDecodeError(UtilError):
    """Raised when an access token cannot be decoded."""

    pass

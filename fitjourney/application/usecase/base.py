"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from fitjourney.domain.error import ValidationError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_uuid(value: str, field: str) -> UUID:
    """Parse an identifier received as text.

    Raises:
        ValidationError: If `value` is not a UUID
    """
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field}")

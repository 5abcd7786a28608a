"""Domain value objects for FitJourney.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from fitjourney.domain.value.common import RootValueObject, ValueObject

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class HabitType(str, Enum):
    """Habits a user can log with a verification photo."""

    SLEEP = "sleep"
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    EXERCISE = "exercise"
    NO_SMOKING = "no_smoking"
    NO_DRINKING = "no_drinking"


class SessionEvent(str, Enum):
    """Session transitions broadcast to subscribers."""

    INITIAL_SESSION = "initial_session"
    SIGNED_IN = "signed_in"
    TOKEN_REFRESHED = "token_refreshed"
    SIGNED_OUT = "signed_out"


class AuthState(str, Enum):
    """Authentication state of a client instance."""

    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Email(RootValueObject[str]):
    """Email address used to sign in.

    Trimmed and checked for the `local@domain.tld` shape only; the identity
    backend owns real validation.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email shape."""
        v = v.strip()
        if not EMAIL_PATTERN.match(v) or len(v) > 255:
            raise ValueError("Please enter a valid email")
        return v

    @property
    def local_part(self) -> str:
        """Part before the `@`."""
        return self.root.split("@", 1)[0]


class ImageConstraints(ValueObject):
    """Target size and compression for a processed photo."""

    max_width: int = Field(gt=0)
    quality: float = Field(default=0.7, gt=0, le=1)

    @classmethod
    def verification_photo(cls, max_width: int = 1200, quality: float = 0.7):
        """Constraints for habit verification photos."""
        return cls(max_width=max_width, quality=quality)

    @classmethod
    def food_analysis(cls, max_width: int = 800, quality: float = 0.7):
        """Constraints for photos sent to meal analysis."""
        return cls(max_width=max_width, quality=quality)

    @property
    def jpeg_quality(self) -> int:
        """Quality on the 1-100 scale used by JPEG encoders."""
        return max(1, min(100, round(self.quality * 100)))


class MediaPayload(ValueObject):
    """Encoded image ready for upload."""

    data: bytes
    content_type: str = "image/jpeg"
    width: int
    height: int

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        return len(self.data)


class ContainerPolicy(ValueObject):
    """Visibility and size policy of a storage container."""

    public: bool = True
    file_size_limit: int = Field(default=5 * 1024 * 1024, gt=0)


class ObjectMetadata(ValueObject):
    """Metadata sent with an uploaded object."""

    content_type: str = "image/jpeg"
    cache_control_seconds: int = 3600


class FoodItem(ValueObject):
    """One recognised item on a meal photo."""

    name: str
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)


class MetricProgress(ValueObject):
    """A daily metric against its goal."""

    value: int = Field(ge=0)
    goal: int = Field(gt=0)

    @property
    def percentage(self) -> float:
        """Progress towards the goal, capped at 100."""
        return min(100.0, self.value / self.goal * 100)

"""Test configuration and fixtures."""

import io
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import logfire
import pytest
from PIL import Image

from fitjourney.domain.model import ActivityLog
from fitjourney.domain.value import ActivityLogId, Email, HabitType, UserId

# Console-only, nothing leaves the machine
logfire.configure(send_to_logfire=False, console=False)


def make_image(
    path: Path, width: int = 1600, height: int = 1200, mode: str = "RGB"
) -> Path:
    """Write a solid-colour test image to `path` (format from the suffix)."""
    color = (200, 80, 40, 255)[: len(mode)]
    Image.new(mode, (width, height), color).save(path)
    return path


def image_size(data: bytes) -> tuple[int, int]:
    """Decode an encoded image and return its size."""
    with Image.open(io.BytesIO(data)) as img:
        return img.size


def make_log(
    user_id: UserId,
    email: str = "a@x.com",
    habit_type: HabitType = HabitType.EXERCISE,
    **overrides,
) -> ActivityLog:
    """Build an unverified habit log."""
    fields = dict(
        id=ActivityLogId(uuid4()),
        user_id=user_id,
        user_email=Email(email),
        habit_type=habit_type,
        note="",
        photo_url="https://storage.test/storage/v1/object/public/habit_photos/a.jpg",
        created_at=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return ActivityLog(**fields)


@pytest.fixture
def photo(tmp_path: Path) -> Path:
    """A 1600x1200 JPEG on disk."""
    return make_image(tmp_path / "photo.jpg")

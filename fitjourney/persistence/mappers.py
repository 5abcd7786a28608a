"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID

from fitjourney.domain.model import ActivityLog, WaterLog
from fitjourney.domain.value import (
    ActivityLogId,
    Email,
    HabitType,
    UserId,
    WaterLogId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops the offset)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def row_to_activity_log(row: Dict[str, Any]) -> ActivityLog:
    """Convert database row to ActivityLog domain model.

    Args:
        row: Database row as dict

    Returns:
        ActivityLog domain model
    """
    verified_by = row.get("verified_by")
    return ActivityLog(
        id=ActivityLogId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        user_email=Email(row["user_email"]),
        habit_type=HabitType(row["habit_type"]),
        note=row.get("note") or "",
        photo_url=row["photo_url"],
        verified=bool(row["verified"]),
        verified_by=UserId(_uuid(verified_by)) if verified_by else None,
        created_at=_utc(row["created_at"]),
    )


def activity_log_to_dict(log: ActivityLog) -> Dict[str, Any]:
    """Convert ActivityLog domain model to database dict.

    Args:
        log: ActivityLog domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": log.id,
        "user_id": log.user_id,
        "user_email": str(log.user_email),
        "habit_type": log.habit_type.value,
        "note": log.note,
        "photo_url": log.photo_url,
        "verified": log.verified,
        "verified_by": log.verified_by,
        "created_at": log.created_at,
    }


def row_to_water_log(row: Dict[str, Any]) -> WaterLog:
    """Convert database row to WaterLog domain model."""
    return WaterLog(
        id=WaterLogId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        user_email=Email(row["user_email"]),
        cups=row["cups"],
        created_at=_utc(row["created_at"]),
    )


def water_log_to_dict(log: WaterLog) -> Dict[str, Any]:
    """Convert WaterLog domain model to database dict."""
    return {
        "id": log.id,
        "user_id": log.user_id,
        "user_email": str(log.user_email),
        "cups": log.cups,
        "created_at": log.created_at,
    }

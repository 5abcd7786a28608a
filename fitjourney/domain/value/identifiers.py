"""Strongly typed identifiers for FitJourney domain entities."""

from typing import NewType
from uuid import UUID

# Subject id assigned by the identity backend (immutable, unlike email)
UserId = NewType("UserId", UUID)

ActivityLogId = NewType("ActivityLogId", UUID)
WaterLogId = NewType("WaterLogId", UUID)

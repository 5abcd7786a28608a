"""Simulated activity sources.

Stand-ins for device sensors and a food recognition service, producing
plausible readings so the dashboard and meal analysis work end to end.
"""

import random

from fitjourney.domain.service.tracking_service import (
    ActivityDataProvider,
    FoodAnalyzer,
)
from fitjourney.domain.value import FoodItem, MediaPayload

STEPS_RANGE = (5000, 12000)
CALORIES_RANGE = (250, 450)
ACTIVE_MINUTES_RANGE = (20, 80)

SAMPLE_MEAL = (
    FoodItem(name="Grilled Chicken", calories=250, protein=30, carbs=0, fat=10),
    FoodItem(name="Brown Rice", calories=180, protein=4, carbs=35, fat=2),
    FoodItem(name="Broccoli", calories=55, protein=3, carbs=10, fat=0),
)


class SimulatedActivityDataProvider(ActivityDataProvider):
    """Random readings within typical daily ranges (upper bounds exclusive)."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    async def get_steps(self) -> int:
        return self._random.randrange(*STEPS_RANGE)

    async def get_calories_burned(self) -> int:
        return self._random.randrange(*CALORIES_RANGE)

    async def get_active_minutes(self) -> int:
        return self._random.randrange(*ACTIVE_MINUTES_RANGE)


class SimulatedFoodAnalyzer(FoodAnalyzer):
    """Returns the same sample meal for every photo."""

    async def analyze(self, payload: MediaPayload) -> list[FoodItem]:
        return list(SAMPLE_MEAL)

"""Activity data sources and daily goal scoring.

Step, calorie and active-minute readings come from an external data
provider (device sensors, a health platform, or a simulation).
"""

from collections.abc import Sequence

from fitjourney.domain.value import FoodItem, MediaPayload, MetricProgress


class ActivityDataProvider:
    """Source of today's activity readings."""

    async def get_steps(self) -> int:
        """Steps walked today."""
        raise NotImplementedError

    async def get_calories_burned(self) -> int:
        """Active calories burned today."""
        raise NotImplementedError

    async def get_active_minutes(self) -> int:
        """Active minutes today."""
        raise NotImplementedError


class FoodAnalyzer:
    """Recognises food items on a meal photo."""

    async def analyze(self, payload: MediaPayload) -> list[FoodItem]:
        """Return the food items found on the photo."""
        raise NotImplementedError


def daily_goal_percentage(metrics: Sequence[MetricProgress]) -> int:
    """Overall progress: the rounded mean of each metric's capped percentage.

    Args:
        metrics: Daily metrics against their goals

    Returns:
        Percentage between 0 and 100 (0 when there are no metrics)
    """
    if not metrics:
        return 0
    return round(sum(m.percentage for m in metrics) / len(metrics))

"""Adapter DI providers."""

from dishka import Scope, provide

from fitjourney.adapter.media.pillow import PillowMediaProcessor
from fitjourney.adapter.simulated.activity import (
    SimulatedActivityDataProvider,
    SimulatedFoodAnalyzer,
)
from fitjourney.domain.service import (
    ActivityDataProvider,
    FoodAnalyzer,
    MediaProcessor,
)
from fitjourney.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Local adapters: image processing and simulated activity sources."""

    scope = Scope.APP

    @provide
    def get_media_processor(self) -> MediaProcessor:
        """Provide Pillow media processor."""
        return PillowMediaProcessor()

    @provide
    def get_activity_data_provider(self) -> ActivityDataProvider:
        """Provide simulated step, calorie and active-minute readings."""
        return SimulatedActivityDataProvider()

    @provide
    def get_food_analyzer(self) -> FoodAnalyzer:
        """Provide simulated meal analysis."""
        return SimulatedFoodAnalyzer()

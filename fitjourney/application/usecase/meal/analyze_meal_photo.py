"""Analyze meal photo use case."""

import logfire
from pydantic import BaseModel

from fitjourney.application.usecase.base import BaseUseCase
from fitjourney.config import MediaSettings
from fitjourney.domain.error import ValidationError
from fitjourney.domain.service import FoodAnalyzer, MediaProcessor
from fitjourney.domain.value import FoodItem, ImageConstraints


class AnalyzeMealPhotoRequest(BaseModel):
    """Request to analyze a meal photo."""

    photo_local_ref: str


class NutritionTotals(BaseModel):
    """Summed nutrition of all recognised items."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0


class AnalyzeMealPhotoResponse(BaseModel):
    """Recognised food items and their totals."""

    items: list[FoodItem]
    totals: NutritionTotals


class AnalyzeMealPhotoUseCase(BaseUseCase):
    """Use case for estimating the nutrition of a meal photo."""

    def __init__(
        self,
        media_processor: MediaProcessor,
        food_analyzer: FoodAnalyzer,
        media_settings: MediaSettings,
    ) -> None:
        self.media_processor = media_processor
        self.food_analyzer = food_analyzer
        self.media_settings = media_settings

    async def execute(
        self, request: AnalyzeMealPhotoRequest
    ) -> AnalyzeMealPhotoResponse:
        """Downsize the photo, analyse it and total the nutrition.

        Raises:
            ValidationError: If no photo is given
            MediaError: If the photo cannot be processed
        """
        if not request.photo_local_ref.strip():
            raise ValidationError("Please take a photo of your meal.")

        with logfire.span("analyze_meal_photo"):
            payload = await self.media_processor.process(
                request.photo_local_ref,
                ImageConstraints.food_analysis(
                    max_width=self.media_settings.analysis_max_width,
                    quality=self.media_settings.quality,
                ),
            )
            items = await self.food_analyzer.analyze(payload)

            totals = NutritionTotals(
                calories=sum(item.calories for item in items),
                protein=sum(item.protein for item in items),
                carbs=sum(item.carbs for item in items),
                fat=sum(item.fat for item in items),
            )
            logfire.info("Meal analysed", items=len(items), calories=totals.calories)

            return AnalyzeMealPhotoResponse(items=items, totals=totals)

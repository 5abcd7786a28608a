"""Meal use cases."""

from fitjourney.application.usecase.meal.analyze_meal_photo import (
    AnalyzeMealPhotoRequest,
    AnalyzeMealPhotoResponse,
    AnalyzeMealPhotoUseCase,
    NutritionTotals,
)

__all__ = [
    "AnalyzeMealPhotoRequest",
    "AnalyzeMealPhotoResponse",
    "AnalyzeMealPhotoUseCase",
    "NutritionTotals",
]

"""Water intake use cases."""

from fitjourney.application.usecase.water.log_water_intake import (
    LogWaterIntakeRequest,
    LogWaterIntakeResponse,
    LogWaterIntakeUseCase,
)

__all__ = [
    "LogWaterIntakeRequest",
    "LogWaterIntakeResponse",
    "LogWaterIntakeUseCase",
]

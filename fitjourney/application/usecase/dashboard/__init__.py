"""Dashboard use cases."""

from fitjourney.application.usecase.dashboard.get_dashboard import (
    GetDashboardRequest,
    GetDashboardResponse,
    GetDashboardUseCase,
    MetricItem,
)

__all__ = [
    "GetDashboardRequest",
    "GetDashboardResponse",
    "GetDashboardUseCase",
    "MetricItem",
]

"""Application layer DI providers."""

from dishka import Scope, provide

from fitjourney.application.usecase.activity import (
    ListActivityLogsUseCase,
    LogActivityUseCase,
    VerifyActivityLogUseCase,
)
from fitjourney.application.usecase.dashboard import GetDashboardUseCase
from fitjourney.application.usecase.meal import AnalyzeMealPhotoUseCase
from fitjourney.application.usecase.water import LogWaterIntakeUseCase
from fitjourney.config import ActivitySettings, GoalSettings, MediaSettings
from fitjourney.domain.service import (
    ActivityDataProvider,
    ActivityLogService,
    FoodAnalyzer,
    MediaProcessor,
    MediaStorageService,
    WaterIntakeService,
)
from fitjourney.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Activity use cases
    @provide(scope=Scope.REQUEST)
    def get_log_activity_use_case(
        self,
        media_processor: MediaProcessor,
        media_storage_service: MediaStorageService,
        activity_log_service: ActivityLogService,
        media_settings: MediaSettings,
        activity_settings: ActivitySettings,
    ) -> LogActivityUseCase:
        """Provide log activity use case."""
        return LogActivityUseCase(
            media_processor=media_processor,
            media_storage_service=media_storage_service,
            activity_log_service=activity_log_service,
            media_settings=media_settings,
            activity_settings=activity_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_activity_logs_use_case(
        self, activity_log_service: ActivityLogService
    ) -> ListActivityLogsUseCase:
        """Provide list activity logs use case."""
        return ListActivityLogsUseCase(activity_log_service=activity_log_service)

    @provide(scope=Scope.REQUEST)
    def get_verify_activity_log_use_case(
        self, activity_log_service: ActivityLogService
    ) -> VerifyActivityLogUseCase:
        """Provide verify activity log use case."""
        return VerifyActivityLogUseCase(activity_log_service=activity_log_service)

    # Water use cases
    @provide(scope=Scope.REQUEST)
    def get_log_water_intake_use_case(
        self, water_intake_service: WaterIntakeService
    ) -> LogWaterIntakeUseCase:
        """Provide log water intake use case."""
        return LogWaterIntakeUseCase(water_intake_service=water_intake_service)

    # Dashboard use cases
    @provide(scope=Scope.REQUEST)
    def get_dashboard_use_case(
        self,
        activity_data_provider: ActivityDataProvider,
        water_intake_service: WaterIntakeService,
        activity_log_service: ActivityLogService,
        goal_settings: GoalSettings,
    ) -> GetDashboardUseCase:
        """Provide get dashboard use case."""
        return GetDashboardUseCase(
            activity_data_provider=activity_data_provider,
            water_intake_service=water_intake_service,
            activity_log_service=activity_log_service,
            goal_settings=goal_settings,
        )

    # Meal use cases
    @provide(scope=Scope.REQUEST)
    def get_analyze_meal_photo_use_case(
        self,
        media_processor: MediaProcessor,
        food_analyzer: FoodAnalyzer,
        media_settings: MediaSettings,
    ) -> AnalyzeMealPhotoUseCase:
        """Provide analyze meal photo use case."""
        return AnalyzeMealPhotoUseCase(
            media_processor=media_processor,
            food_analyzer=food_analyzer,
            media_settings=media_settings,
        )

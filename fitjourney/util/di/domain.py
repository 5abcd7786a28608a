"""Domain layer DI providers."""

from dishka import Scope, provide

from fitjourney.adapter.supabase.auth import SupabaseAuthClient
from fitjourney.adapter.supabase.storage import SupabaseStorageGateway
from fitjourney.config import ActivitySettings, AuthSettings, StorageSettings
from fitjourney.domain.repository import ActivityLogRepository, WaterLogRepository
from fitjourney.domain.service import (
    ActivityLogService,
    MediaStorageService,
    SessionStorage,
    SessionStore,
    WaterIntakeService,
)
from fitjourney.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle: one request is one user action with its own transaction.
    The session store lives for the whole app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_session_store(
        self,
        auth_client: SupabaseAuthClient,
        session_storage: SessionStorage,
        auth_settings: AuthSettings,
    ) -> SessionStore:
        """Provide the single session store of this client."""
        return SessionStore(
            identity_client=auth_client,
            storage=session_storage,
            auth_settings=auth_settings,
        )

    @provide
    def get_media_storage_service(
        self, gateway: SupabaseStorageGateway, storage_settings: StorageSettings
    ) -> MediaStorageService:
        """Provide media storage domain service."""
        return MediaStorageService(gateway=gateway, storage_settings=storage_settings)

    @provide
    def get_activity_log_service(
        self,
        activity_log_repository: ActivityLogRepository,
        activity_settings: ActivitySettings,
    ) -> ActivityLogService:
        """Provide activity log domain service."""
        return ActivityLogService(
            activity_log_repository=activity_log_repository,
            activity_settings=activity_settings,
        )

    @provide
    def get_water_intake_service(
        self,
        water_log_repository: WaterLogRepository,
        activity_settings: ActivitySettings,
    ) -> WaterIntakeService:
        """Provide water intake domain service."""
        return WaterIntakeService(
            water_log_repository=water_log_repository,
            activity_settings=activity_settings,
        )

"""Storage infrastructure providers."""

from dishka import Scope, provide

from fitjourney.adapter.supabase.storage import (
    RealSupabaseStorageGateway,
    SupabaseStorageGateway,
)
from fitjourney.config import Settings
from fitjourney.domain.service import SessionStore
from fitjourney.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider backed by Supabase Storage."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_storage_gateway(
        self, settings: Settings, session_store: SessionStore
    ) -> SupabaseStorageGateway:
        """Provide Supabase storage gateway.

        Requests carry the signed-in user's access token when there is one.
        """
        return RealSupabaseStorageGateway(
            storage_url=settings.supabase.storage_url,
            anon_key=settings.supabase.anon_key,
            access_token_provider=session_store.access_token,
            timeout=settings.supabase.http_timeout_seconds,
        )

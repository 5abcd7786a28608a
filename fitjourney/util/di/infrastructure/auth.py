"""Auth infrastructure providers."""

from dishka import Scope, provide

from fitjourney.adapter.supabase.auth import RealSupabaseAuthClient, SupabaseAuthClient
from fitjourney.adapter.supabase.session_storage import FileSessionStorage
from fitjourney.config import Settings
from fitjourney.domain.service import SessionStorage
from fitjourney.util.di.base import ProviderBase
from fitjourney.util.error import ConfigurationError

PLACEHOLDER_ANON_KEY = "CHANGE_ME_IN_PRODUCTION"


class AuthProvider(ProviderBase):
    """Auth component base."""

    __mock_component__ = "auth"


class ProdAuthProvider(AuthProvider):
    """Production auth provider backed by Supabase Auth."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_supabase_auth_client(self, settings: Settings) -> SupabaseAuthClient:
        """Provide Supabase auth client.

        Raises:
            ConfigurationError: If production runs with the placeholder anon key
        """
        if (
            settings.environment == "production"
            and settings.supabase.anon_key == PLACEHOLDER_ANON_KEY
        ):
            raise ConfigurationError(
                "SUPABASE__ANON_KEY must be set in production"
            )

        return RealSupabaseAuthClient(
            auth_url=settings.supabase.auth_url,
            anon_key=settings.supabase.anon_key,
            timeout=settings.supabase.http_timeout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_session_storage(self, settings: Settings) -> SessionStorage:
        """Provide on-disk session storage."""
        return FileSessionStorage(settings.auth.session_storage_dir)

"""Mock auth providers for testing."""

from dishka import Scope, provide

from fitjourney.adapter.supabase.auth import MockSupabaseAuthClient, SupabaseAuthClient
from fitjourney.adapter.supabase.session_storage import InMemorySessionStorage
from fitjourney.domain.service import SessionStorage
from fitjourney.util.di.infrastructure.auth import AuthProvider


class MockAuthProvider(AuthProvider):
    """Mock auth provider with in-memory accounts and session storage."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_supabase_auth_client(self) -> SupabaseAuthClient:
        """Provide mock Supabase auth client."""
        return MockSupabaseAuthClient()

    @provide(scope=Scope.APP)
    def get_session_storage(self) -> SessionStorage:
        """Provide in-memory session storage."""
        return InMemorySessionStorage()

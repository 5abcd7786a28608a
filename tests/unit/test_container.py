"""Unit tests for test container assembly."""

import pytest

from fitjourney.adapter.supabase.auth import MockSupabaseAuthClient, SupabaseAuthClient
from fitjourney.adapter.supabase.storage import (
    InMemoryStorageGateway,
    SupabaseStorageGateway,
)
from fitjourney.domain.repository import ActivityLogRepository
from fitjourney.domain.service import SessionStore
from fitjourney.persistence.repository.inmemory import InMemoryActivityLogRepository
from fitjourney.util.di import AuthProvider, ProdAuthProvider, get_provider
from tests.di import MockAuthProvider, build_test_container
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def test_unknown_component_rejected():
    with pytest.raises(ValueError, match="Unknown components"):
        build_test_container(unmock={"payments"})


def test_get_provider_selects_by_mock_flag():
    assert get_provider(AuthProvider, use_mock=True) is MockAuthProvider
    assert get_provider(AuthProvider, use_mock=False) is ProdAuthProvider


@pytest.mark.asyncio
async def test_default_container_uses_mocks(unit_env):
    """Without unmocking, every infrastructure component is a mock."""
    assert isinstance(await unit_env.get(SupabaseAuthClient), MockSupabaseAuthClient)
    assert isinstance(
        await unit_env.get(SupabaseStorageGateway), InMemoryStorageGateway
    )
    assert isinstance(
        await unit_env.get(ActivityLogRepository), InMemoryActivityLogRepository
    )


@pytest.mark.asyncio
async def test_session_store_is_shared(unit_env):
    """The session store is one per app container."""
    assert await unit_env.get(SessionStore) is await unit_env.get(SessionStore)

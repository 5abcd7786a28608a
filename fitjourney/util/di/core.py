"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from fitjourney.config import (
    ActivitySettings,
    AuthSettings,
    GoalSettings,
    MediaSettings,
    Settings,
    StorageSettings,
)
from fitjourney.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        """Provide storage settings."""
        return settings.storage

    @provide
    def provide_media_settings(self, settings: Settings) -> MediaSettings:
        """Provide media settings."""
        return settings.media

    @provide
    def provide_activity_settings(self, settings: Settings) -> ActivitySettings:
        """Provide activity settings."""
        return settings.activity

    @provide
    def provide_goal_settings(self, settings: Settings) -> GoalSettings:
        """Provide goal settings."""
        return settings.goals

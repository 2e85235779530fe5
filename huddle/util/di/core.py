"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from huddle.config import AuthSettings, Settings, StorageSettings, ThreadSettings
from huddle.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        """Provide thread settings."""
        return settings.threads

    @provide(scope=Scope.APP)
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        """Provide storage settings."""
        return settings.storage

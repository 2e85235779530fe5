"""Object storage infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import httpx

from huddle.adapter.storage import HttpObjectStorage
from huddle.config import StorageSettings
from huddle.domain.service import ObjectStorage
from huddle.util.di.base import ProviderBase
from huddle.util.error import ConfigurationError


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider over the storage REST API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, storage_settings: StorageSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the HTTP client used for uploads, closed on shutdown."""
        async with httpx.AsyncClient(
            timeout=storage_settings.timeout_seconds
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_object_storage(
        self, client: httpx.AsyncClient, storage_settings: StorageSettings
    ) -> ObjectStorage:
        """Provide attachment object storage.

        Raises:
            ConfigurationError: If the storage endpoint is not configured
        """
        if not storage_settings.base_url:
            raise ConfigurationError("Storage base URL must be configured")
        return HttpObjectStorage(client=client, settings=storage_settings)

"""Mock storage providers for testing."""

from dishka import Scope, provide

from huddle.adapter.storage import MockObjectStorage
from huddle.config import StorageSettings
from huddle.domain.service import ObjectStorage
from huddle.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider keeping uploads in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_object_storage(self, storage_settings: StorageSettings) -> ObjectStorage:
        """Provide in-memory object storage."""
        return MockObjectStorage(bucket=storage_settings.bucket)

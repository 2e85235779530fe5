"""Object storage clients for message attachments.

The HTTP client speaks the storage REST API used by the hosted backend:
objects are uploaded with ``POST /object/{bucket}/{path}`` and served from
``/object/public/{bucket}/{path}``.
"""

from urllib.parse import quote

import httpx
import logfire

from huddle.adapter.error import StorageError
from huddle.config import StorageSettings
from huddle.domain.service.attachment_service import ObjectStorage


class HttpObjectStorage(ObjectStorage):
    """Object storage over the storage REST API."""

    def __init__(self, client: httpx.AsyncClient, settings: StorageSettings) -> None:
        """Initialize storage client.

        Args:
            client: Shared HTTP client
            settings: Storage settings (endpoint, bucket, key)
        """
        self.client = client
        self.base_url = settings.base_url.rstrip("/")
        self.bucket = settings.bucket
        self.api_key = settings.api_key

    def _headers(self, content_type: str) -> dict[str, str]:
        headers = {"Content-Type": content_type, "x-upsert": "false"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Upload an object.

        Raises:
            StorageError: On transport failure or non-2xx response
        """
        url = f"{self.base_url}/object/{self.bucket}/{quote(path)}"
        try:
            response = await self.client.post(
                url, content=data, headers=self._headers(content_type)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logfire.error(
                "Storage upload rejected",
                path=path,
                status_code=e.response.status_code,
                body=e.response.text[:500],
            )
            raise StorageError(
                f"Storage upload failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logfire.error("Storage upload failed", path=path, error=str(e))
            raise StorageError(f"Storage upload failed: {e}") from e

        logfire.info("Object uploaded", bucket=self.bucket, path=path, size=len(data))

    def public_url(self, path: str) -> str:
        """Public URL of a stored object."""
        return f"{self.base_url}/object/public/{self.bucket}/{quote(path)}"


class MockObjectStorage(ObjectStorage):
    """In-memory object storage for tests."""

    def __init__(self, bucket: str = "message_attachments") -> None:
        self.bucket = bucket
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Store the object in memory."""
        if path in self.objects:
            raise StorageError(f"Object already exists: {path}")
        self.objects[path] = (data, content_type)

    def public_url(self, path: str) -> str:
        """Fake public URL."""
        return f"memory://{self.bucket}/{quote(path)}"

"""Attachment domain service."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import uuid4

import logfire

from huddle.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from huddle.domain.model import Attachment
from huddle.domain.repository import MessageRepository
from huddle.domain.value import AttachmentId, AttachmentUpload, MessageId, UserId

from .base import Service


class ObjectStorage(ABC):
    """Port for the bucket attachments are stored in."""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Store ``data`` at ``path``.

        Raises:
            StorageError: If the storage backend rejects the upload
        """
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL of an object stored at ``path``."""
        pass


class AttachmentService(Service):
    """Domain service for message attachments."""

    def __init__(
        self,
        message_repository: MessageRepository,
        object_storage: ObjectStorage,
        max_upload_bytes: int,
    ) -> None:
        """Initialize attachment service.

        Args:
            message_repository: Message repository
            object_storage: Bucket for attachment files
            max_upload_bytes: Largest accepted file
        """
        self.message_repository = message_repository
        self.object_storage = object_storage
        self.max_upload_bytes = max_upload_bytes

    async def upload_attachment(
        self, message_id: MessageId, user_id: UserId, upload: AttachmentUpload
    ) -> Attachment:
        """Upload a file and attach it to a message the user wrote.

        Args:
            message_id: Message to attach to
            user_id: Uploading user (must be the message author)
            upload: File name, content type and bytes

        Returns:
            The recorded attachment

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the file is empty or too large
        """
        with logfire.span(
            "attachment_service.upload_attachment",
            message_id=message_id,
            user_id=str(user_id),
            file_name=upload.file_name,
            size_bytes=upload.size_bytes,
        ):
            message = await self.message_repository.find_by_id(message_id)
            if message is None:
                logfire.warn("Attachment target not found", message_id=message_id)
                raise NotFoundError("Message", str(message_id))
            if not message.is_authored_by(user_id):
                logfire.warn(
                    "Non-author attempted to attach file",
                    message_id=message_id,
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("message", str(message_id), str(user_id))

            self.validate_upload(upload)

            now = datetime.now()
            path = self.object_path(user_id, message_id, upload.file_name, now)
            await self.object_storage.upload(path, upload.data, upload.content_type)

            attachment = Attachment(
                id=AttachmentId(uuid4()),
                message_id=message_id,
                uploaded_by=user_id,
                file_name=upload.file_name,
                file_url=self.object_storage.public_url(path),
                content_type=upload.content_type,
                size_bytes=upload.size_bytes,
                created_at=now,
            )
            saved = await self.message_repository.add_attachment(attachment)
            logfire.info(
                "Attachment uploaded",
                attachment_id=str(saved.id),
                message_id=message_id,
                path=path,
            )
            return saved

    def validate_upload(self, upload: AttachmentUpload) -> None:
        """Check a file against the upload limits.

        Raises:
            ValidationError: If the file is empty or too large
        """
        if upload.size_bytes == 0:
            raise ValidationError("Attachment must not be empty")
        if upload.size_bytes > self.max_upload_bytes:
            raise ValidationError(
                f"Attachment must be at most {self.max_upload_bytes} bytes"
            )

    @staticmethod
    def object_path(
        user_id: UserId, message_id: MessageId, file_name: str, when: datetime
    ) -> str:
        """Storage path for an upload: ``{user}/{message}/{millis}-{name}``."""
        millis = int(when.timestamp() * 1000)
        return f"{user_id}/{message_id}/{millis}-{file_name}"

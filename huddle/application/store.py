"""Message store port used by thread sessions.

A ``MessageStore`` is the acting user's view of the message backend. The
user is bound into the store when it is created, so the calls mirror what a
client can do: list, post, edit, delete, react and attach.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

import logfire
from sqlalchemy.exc import SQLAlchemyError

from huddle.adapter.error import StorageError
from huddle.domain.error import TransientStoreError, ValidationError
from huddle.domain.model import Attachment, Message
from huddle.domain.service import AttachmentService, MessageService
from huddle.domain.value import AttachmentUpload, Emoji, MessageId, ThreadId, UserId


class MessageStore(ABC):
    """Authoritative source of thread messages for one acting user.

    Every method may raise a ``DomainError``: ``ValidationError``,
    ``NotAuthorizedError``, ``NotFoundError`` or ``TransientStoreError``.
    """

    @abstractmethod
    async def list_messages(self, thread_id: ThreadId) -> list[Message]:
        """Current flat message list of a thread, in canonical order."""
        pass

    @abstractmethod
    async def post_message(
        self,
        thread_id: ThreadId,
        body: str,
        parent_id: MessageId | None = None,
        attachments: Sequence[AttachmentUpload] = (),
    ) -> Message:
        """Create a top-level message or reply, uploading any files."""
        pass

    @abstractmethod
    async def edit_message(self, message_id: MessageId, new_body: str) -> Message:
        """Replace a message body; only the author may do this."""
        pass

    @abstractmethod
    async def delete_message(self, message_id: MessageId) -> None:
        """Delete a message; only the author may do this."""
        pass

    @abstractmethod
    async def toggle_reaction(self, message_id: MessageId, emoji: str) -> bool:
        """Toggle the user's reaction; True when it was added."""
        pass

    @abstractmethod
    async def upload_attachment(
        self, message_id: MessageId, upload: AttachmentUpload
    ) -> Attachment:
        """Attach a file to a message the user wrote."""
        pass


async def post_with_attachments(
    message_service: MessageService,
    attachment_service: AttachmentService,
    thread_id: ThreadId,
    author_id: UserId,
    body: str,
    parent_id: MessageId | None = None,
    attachments: Sequence[AttachmentUpload] = (),
) -> Message:
    """Post a message, then upload its files in order.

    Files are checked against the upload limits before the message is
    created. If an upload fails the message is deleted again and the error
    is re-raised, so a failed post leaves nothing behind in the thread.
    Files already uploaded for it stay in the bucket.

    Returns:
        The message as stored after all uploads
    """
    for upload in attachments:
        attachment_service.validate_upload(upload)

    message = await message_service.post_message(
        thread_id=thread_id,
        author_id=author_id,
        body=body,
        parent_id=parent_id,
        has_attachments=bool(attachments),
    )
    if not attachments:
        return message

    try:
        for upload in attachments:
            await attachment_service.upload_attachment(message.id, author_id, upload)
    except Exception as e:
        logfire.warn(
            "Attachment upload failed, withdrawing message",
            message_id=message.id,
            thread_id=str(thread_id),
            error=str(e),
        )
        await message_service.delete_message(message.id, author_id)
        raise
    return await message_service.get_message(message.id)


def parse_emoji(emoji: str) -> Emoji:
    """Parse a raw emoji string.

    Raises:
        ValidationError: If the emoji is blank or too long
    """
    try:
        return Emoji(emoji)
    except ValueError as e:
        raise ValidationError(f"Invalid emoji: {emoji!r}") from e


class ServiceMessageStore(MessageStore):
    """In-process store backed by the domain services."""

    def __init__(
        self,
        message_service: MessageService,
        attachment_service: AttachmentService,
        user_id: UserId,
    ) -> None:
        """Initialize store.

        Args:
            message_service: Message domain service
            attachment_service: Attachment domain service
            user_id: Acting user
        """
        self.message_service = message_service
        self.attachment_service = attachment_service
        self.user_id = user_id

    async def list_messages(self, thread_id: ThreadId) -> list[Message]:
        try:
            return await self.message_service.list_thread_messages(thread_id)
        except SQLAlchemyError as e:
            raise TransientStoreError(str(e)) from e

    async def post_message(
        self,
        thread_id: ThreadId,
        body: str,
        parent_id: MessageId | None = None,
        attachments: Sequence[AttachmentUpload] = (),
    ) -> Message:
        try:
            return await post_with_attachments(
                self.message_service,
                self.attachment_service,
                thread_id=thread_id,
                author_id=self.user_id,
                body=body,
                parent_id=parent_id,
                attachments=attachments,
            )
        except (StorageError, SQLAlchemyError) as e:
            raise TransientStoreError(str(e)) from e

    async def edit_message(self, message_id: MessageId, new_body: str) -> Message:
        try:
            return await self.message_service.edit_message(
                message_id, self.user_id, new_body
            )
        except SQLAlchemyError as e:
            raise TransientStoreError(str(e)) from e

    async def delete_message(self, message_id: MessageId) -> None:
        try:
            await self.message_service.delete_message(message_id, self.user_id)
        except SQLAlchemyError as e:
            raise TransientStoreError(str(e)) from e

    async def toggle_reaction(self, message_id: MessageId, emoji: str) -> bool:
        parsed = parse_emoji(emoji)
        try:
            return await self.message_service.toggle_reaction(
                message_id, self.user_id, parsed
            )
        except SQLAlchemyError as e:
            raise TransientStoreError(str(e)) from e

    async def upload_attachment(
        self, message_id: MessageId, upload: AttachmentUpload
    ) -> Attachment:
        try:
            return await self.attachment_service.upload_attachment(
                message_id, self.user_id, upload
            )
        except (StorageError, SQLAlchemyError) as e:
            raise TransientStoreError(str(e)) from e

"""Message domain service."""

import logfire

from huddle.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from huddle.domain.model import Message
from huddle.domain.repository import MessageRepository
from huddle.domain.value import Emoji, MessageId, ThreadId, UserId

from .base import Service


class MessageService(Service):
    """Domain service for thread messages.

    This is the authoritative enforcement point for authorship rules; any
    client-side hiding of controls is a convenience only.
    """

    def __init__(
        self, message_repository: MessageRepository, max_body_length: int = 10000
    ) -> None:
        """Initialize message service.

        Args:
            message_repository: Message repository
            max_body_length: Longest accepted message body
        """
        self.message_repository = message_repository
        self.max_body_length = max_body_length

    async def list_thread_messages(self, thread_id: ThreadId) -> list[Message]:
        """Get the flat message list of a thread in creation order.

        Args:
            thread_id: Thread ID

        Returns:
            Messages with reactions and attachments
        """
        with logfire.span(
            "message_service.list_thread_messages", thread_id=str(thread_id)
        ):
            messages = await self.message_repository.find_by_thread(thread_id)
            logfire.info(
                "Messages retrieved for thread",
                thread_id=str(thread_id),
                count=len(messages),
            )
            return messages

    async def get_message(self, message_id: MessageId) -> Message:
        """Get a message by ID.

        Raises:
            NotFoundError: If the message does not exist
        """
        with logfire.span("message_service.get_message", message_id=message_id):
            message = await self.message_repository.find_by_id(message_id)
            if message is None:
                logfire.warn("Message not found", message_id=message_id)
                raise NotFoundError("Message", str(message_id))
            return message

    async def post_message(
        self,
        thread_id: ThreadId,
        author_id: UserId,
        body: str,
        parent_id: MessageId | None = None,
        has_attachments: bool = False,
    ) -> Message:
        """Post a top-level message or a reply.

        Args:
            thread_id: Thread ID
            author_id: Author user ID
            body: Message text
            parent_id: Message being replied to (None for top-level)
            has_attachments: Whether files will be attached right after

        Returns:
            Created message

        Raises:
            ValidationError: If the body is empty without attachments, too
                long, or the parent is not in this thread
            NotFoundError: If the parent message does not exist
        """
        with logfire.span(
            "message_service.post_message",
            thread_id=str(thread_id),
            author_id=str(author_id),
            parent_id=parent_id,
        ):
            self._validate_body(body, has_attachments)

            if parent_id is not None:
                parent = await self.message_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn(
                        "Parent message not found",
                        parent_id=parent_id,
                        thread_id=str(thread_id),
                    )
                    raise NotFoundError("Message", str(parent_id))
                if parent.thread_id != thread_id:
                    logfire.warn(
                        "Parent message belongs to another thread",
                        parent_id=parent_id,
                        parent_thread_id=str(parent.thread_id),
                        target_thread_id=str(thread_id),
                    )
                    raise ValidationError("Parent message does not belong to this thread")

            message = await self.message_repository.create(
                thread_id=thread_id,
                author_id=author_id,
                body=body,
                parent_id=parent_id,
            )
            logfire.info(
                "Message posted",
                message_id=message.id,
                thread_id=str(thread_id),
                is_reply=parent_id is not None,
            )
            return message

    async def edit_message(
        self, message_id: MessageId, user_id: UserId, body: str
    ) -> Message:
        """Replace the body of a message the user wrote.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the new body is invalid
        """
        with logfire.span(
            "message_service.edit_message",
            message_id=message_id,
            user_id=str(user_id),
            text_length=len(body),
        ):
            message = await self.get_message(message_id)
            self._ensure_author(message, user_id)
            self._validate_body(body, bool(message.attachments))

            updated = await self.message_repository.update_body(message_id, body)
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Message", str(message_id))

            logfire.info("Message edited", message_id=message_id)
            return updated

    async def delete_message(self, message_id: MessageId, user_id: UserId) -> None:
        """Delete a message the user wrote.

        Replies stay in the thread and show up as top-level messages.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "message_service.delete_message",
            message_id=message_id,
            user_id=str(user_id),
        ):
            message = await self.get_message(message_id)
            self._ensure_author(message, user_id)

            deleted = await self.message_repository.delete(message_id)
            if not deleted:
                raise NotFoundError("Message", str(message_id))
            logfire.info(
                "Message deleted",
                message_id=message_id,
                thread_id=str(message.thread_id),
            )

    async def toggle_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Add the user's reaction if absent, remove it otherwise.

        Two toggles in a row leave the message as it was.

        Returns:
            True if the reaction was added, False if it was removed

        Raises:
            NotFoundError: If the message does not exist
        """
        with logfire.span(
            "message_service.toggle_reaction",
            message_id=message_id,
            user_id=str(user_id),
            emoji=emoji.root,
        ):
            await self.get_message(message_id)

            if await self.message_repository.has_reaction(message_id, user_id, emoji):
                await self.message_repository.remove_reaction(message_id, user_id, emoji)
                logfire.info("Reaction removed", message_id=message_id, emoji=emoji.root)
                return False

            await self.message_repository.add_reaction(message_id, user_id, emoji)
            logfire.info("Reaction added", message_id=message_id, emoji=emoji.root)
            return True

    def _validate_body(self, body: str, has_attachments: bool) -> None:
        if not body.strip() and not has_attachments:
            raise ValidationError("Message must have text or attachments")
        if len(body) > self.max_body_length:
            raise ValidationError(
                f"Message must be at most {self.max_body_length} characters"
            )

    def _ensure_author(self, message: Message, user_id: UserId) -> None:
        if not message.is_authored_by(user_id):
            logfire.warn(
                "Non-author attempted to modify message",
                message_id=message.id,
                author_id=str(message.author_id),
                user_id=str(user_id),
            )
            raise NotAuthorizedError("message", str(message.id), str(user_id))

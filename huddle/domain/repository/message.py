"""Message repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from huddle.domain.model import Attachment, Message
from huddle.domain.value import Emoji, MessageId, ThreadId, UserId


class MessageRepository(ABC):
    """Repository for Message entity.

    Defines the contract for message persistence operations, including the
    reactions and attachments that hang off a message. Implementations live
    in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID.

        Args:
            message_id: The message's identifier

        Returns:
            The message with reactions and attachments if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_thread(self, thread_id: ThreadId) -> List[Message]:
        """Find all messages of a thread in creation order.

        Args:
            thread_id: The thread ID

        Returns:
            Flat list of messages, oldest first
        """
        pass

    @abstractmethod
    async def create(
        self,
        thread_id: ThreadId,
        author_id: UserId,
        body: str,
        parent_id: Optional[MessageId] = None,
    ) -> Message:
        """Create a message and assign its identifier.

        Args:
            thread_id: Owning thread
            author_id: Author user ID
            body: Message text
            parent_id: Parent message for replies

        Returns:
            The stored message
        """
        pass

    @abstractmethod
    async def update_body(self, message_id: MessageId, body: str) -> Optional[Message]:
        """Replace a message body and mark it as edited.

        Args:
            message_id: The message ID
            body: New text

        Returns:
            The updated message, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message with its reactions and attachments.

        Replies are kept; their ``parent_id`` is cleared.

        Args:
            message_id: The message ID

        Returns:
            True if a message was deleted
        """
        pass

    @abstractmethod
    async def has_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Check whether a user has reacted to a message with an emoji."""
        pass

    @abstractmethod
    async def add_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Add a reaction.

        Returns:
            True if added, False if it already existed
        """
        pass

    @abstractmethod
    async def remove_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Remove a reaction.

        Returns:
            True if removed, False if there was nothing to remove
        """
        pass

    @abstractmethod
    async def add_attachment(self, attachment: Attachment) -> Attachment:
        """Record an uploaded attachment against its message.

        Args:
            attachment: Attachment metadata (file already in storage)

        Returns:
            The stored attachment
        """
        pass

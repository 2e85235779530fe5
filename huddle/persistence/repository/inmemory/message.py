"""In-memory message repository for testing."""

from datetime import datetime
from itertools import count
from typing import Optional

from huddle.domain.model import Attachment, Message
from huddle.domain.repository.message import MessageRepository
from huddle.domain.value import Emoji, MessageId, Reaction, ThreadId, UserId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing.

    Mirrors the database schema's delete behaviour: reactions and
    attachments go with the message, replies lose their parent.
    """

    def __init__(self) -> None:
        self._messages: dict[MessageId, Message] = {}
        self._ids = count(1)

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        return self._messages.get(message_id)

    async def find_by_thread(self, thread_id: ThreadId) -> list[Message]:
        """Find all messages of a thread in creation order."""
        return sorted(
            (m for m in self._messages.values() if m.thread_id == thread_id),
            key=lambda m: m.id,
        )

    async def create(
        self,
        thread_id: ThreadId,
        author_id: UserId,
        body: str,
        parent_id: Optional[MessageId] = None,
    ) -> Message:
        """Create a message with the next sequential id."""
        now = datetime.now()
        message = Message(
            id=MessageId(next(self._ids)),
            thread_id=thread_id,
            author_id=author_id,
            body=body,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )
        self._messages[message.id] = message
        return message

    async def save(self, message: Message) -> Message:
        """Store a fully built message as-is (test seeding)."""
        self._messages[message.id] = message
        return message

    async def update_body(self, message_id: MessageId, body: str) -> Optional[Message]:
        """Replace the body and set the edited flag."""
        message = self._messages.get(message_id)
        if message is None:
            return None
        updated = message.model_copy(
            update={"body": body, "is_edited": True, "updated_at": datetime.now()}
        )
        self._messages[message_id] = updated
        return updated

    async def delete(self, message_id: MessageId) -> bool:
        """Delete a message and detach its replies."""
        if self._messages.pop(message_id, None) is None:
            return False
        for reply_id, reply in list(self._messages.items()):
            if reply.parent_id == message_id:
                self._messages[reply_id] = reply.model_copy(update={"parent_id": None})
        return True

    async def has_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Check whether a reaction exists."""
        message = self._messages.get(message_id)
        if message is None:
            return False
        return Reaction(emoji=emoji, user_id=user_id) in message.reactions

    async def add_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Add a reaction unless it is already there."""
        message = self._messages.get(message_id)
        reaction = Reaction(emoji=emoji, user_id=user_id)
        if message is None or reaction in message.reactions:
            return False
        self._messages[message_id] = message.model_copy(
            update={"reactions": message.reactions + (reaction,)}
        )
        return True

    async def remove_reaction(
        self, message_id: MessageId, user_id: UserId, emoji: Emoji
    ) -> bool:
        """Remove a reaction if present."""
        message = self._messages.get(message_id)
        reaction = Reaction(emoji=emoji, user_id=user_id)
        if message is None or reaction not in message.reactions:
            return False
        self._messages[message_id] = message.model_copy(
            update={
                "reactions": tuple(r for r in message.reactions if r != reaction)
            }
        )
        return True

    async def add_attachment(self, attachment: Attachment) -> Attachment:
        """Append an attachment to its message."""
        message = self._messages.get(attachment.message_id)
        if message is not None:
            self._messages[attachment.message_id] = message.model_copy(
                update={"attachments": message.attachments + (attachment,)}
            )
        return attachment

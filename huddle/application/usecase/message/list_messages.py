"""List thread messages use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from huddle.domain.model import Attachment, Message
from huddle.domain.service import MessageService
from huddle.domain.value import (
    AttachmentId,
    Emoji,
    MessageId,
    Reaction,
    ThreadId,
    UserId,
)


class ReactionItem(BaseModel):
    """Reaction item in response."""

    emoji: str
    user_id: str


class AttachmentItem(BaseModel):
    """Attachment item in response."""

    attachment_id: str
    message_id: int
    uploaded_by: str
    file_name: str
    file_url: str
    content_type: str | None
    size_bytes: int | None
    created_at: datetime

    @classmethod
    def from_domain(cls, attachment: Attachment) -> "AttachmentItem":
        return cls(
            attachment_id=str(attachment.id),
            message_id=attachment.message_id,
            uploaded_by=str(attachment.uploaded_by),
            file_name=attachment.file_name,
            file_url=attachment.file_url,
            content_type=attachment.content_type,
            size_bytes=attachment.size_bytes,
            created_at=attachment.created_at,
        )

    def to_domain(self) -> Attachment:
        return Attachment(
            id=AttachmentId(UUID(self.attachment_id)),
            message_id=MessageId(self.message_id),
            uploaded_by=UserId(UUID(self.uploaded_by)),
            file_name=self.file_name,
            file_url=self.file_url,
            content_type=self.content_type,
            size_bytes=self.size_bytes,
            created_at=self.created_at,
        )


class MessageItem(BaseModel):
    """Flat message item in response.

    This is the wire form of a message; clients rebuild the tree from
    ``parent_id``.
    """

    message_id: int
    thread_id: str
    author_id: str
    body: str
    parent_id: int | None
    is_edited: bool
    created_at: datetime
    updated_at: datetime
    reactions: list[ReactionItem]
    attachments: list[AttachmentItem]

    @classmethod
    def from_domain(cls, message: Message) -> "MessageItem":
        return cls(
            message_id=message.id,
            thread_id=str(message.thread_id),
            author_id=str(message.author_id),
            body=message.body,
            parent_id=message.parent_id,
            is_edited=message.is_edited,
            created_at=message.created_at,
            updated_at=message.updated_at,
            reactions=[
                ReactionItem(emoji=r.emoji.root, user_id=str(r.user_id))
                for r in message.reactions
            ],
            attachments=[AttachmentItem.from_domain(a) for a in message.attachments],
        )

    def to_domain(self) -> Message:
        return Message(
            id=MessageId(self.message_id),
            thread_id=ThreadId(UUID(self.thread_id)),
            author_id=UserId(UUID(self.author_id)),
            body=self.body,
            parent_id=MessageId(self.parent_id) if self.parent_id is not None else None,
            is_edited=self.is_edited,
            created_at=self.created_at,
            updated_at=self.updated_at,
            reactions=tuple(
                Reaction(emoji=Emoji(r.emoji), user_id=UserId(UUID(r.user_id)))
                for r in self.reactions
            ),
            attachments=tuple(a.to_domain() for a in self.attachments),
        )


class ListMessagesRequest(BaseModel):
    """List messages request."""

    thread_id: str  # UUID string


class ListMessagesResponse(BaseModel):
    """List messages response."""

    thread_id: str
    messages: list[MessageItem]
    total: int


class ListMessagesUseCase:
    """Use case for getting the flat message list of a thread."""

    def __init__(self, message_service: MessageService) -> None:
        """Initialize list messages use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: ListMessagesRequest) -> ListMessagesResponse:
        """Execute list messages flow.

        Args:
            request: List messages request

        Returns:
            Messages in creation order with reactions and attachments
        """
        thread_id = ThreadId(UUID(request.thread_id))
        messages = await self.message_service.list_thread_messages(thread_id)
        items = [MessageItem.from_domain(message) for message in messages]
        return ListMessagesResponse(
            thread_id=request.thread_id,
            messages=items,
            total=len(items),
        )

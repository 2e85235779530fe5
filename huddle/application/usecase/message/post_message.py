"""Post message use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.store import post_with_attachments
from huddle.domain.service import AttachmentService, MessageService
from huddle.domain.value import AttachmentUpload, MessageId, ThreadId, UserId

from .list_messages import MessageItem


class PostMessageRequest(BaseModel):
    """Post message request."""

    thread_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    body: str = ""
    parent_id: int | None = None  # Parent message ID for replies
    attachments: list[AttachmentUpload] = []


class PostMessageResponse(MessageItem):
    """Post message response."""

    pass


class PostMessageUseCase:
    """Use case for posting a message or a reply, with optional files."""

    def __init__(
        self,
        message_service: MessageService,
        attachment_service: AttachmentService,
    ) -> None:
        """Initialize post message use case.

        Args:
            message_service: Message domain service
            attachment_service: Attachment domain service
        """
        self.message_service = message_service
        self.attachment_service = attachment_service

    async def execute(self, request: PostMessageRequest) -> PostMessageResponse:
        """Execute post message flow.

        Steps:
        1. Create the message (service validates body and parent)
        2. Upload each attachment to object storage and record it

        Args:
            request: Post message request

        Returns:
            The stored message, attachments included

        Raises:
            ValidationError: If the message is empty or the parent invalid
            NotFoundError: If the parent message does not exist
        """
        message = await post_with_attachments(
            self.message_service,
            self.attachment_service,
            thread_id=ThreadId(UUID(request.thread_id)),
            author_id=UserId(UUID(request.author_id)),
            body=request.body,
            parent_id=(
                MessageId(request.parent_id) if request.parent_id is not None else None
            ),
            attachments=request.attachments,
        )
        return PostMessageResponse(**MessageItem.from_domain(message).model_dump())

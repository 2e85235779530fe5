"""Edit message use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.domain.service import MessageService
from huddle.domain.value import MessageId, UserId

from .list_messages import MessageItem


class EditMessageRequest(BaseModel):
    """Edit message request."""

    message_id: int
    user_id: str  # Current user ID (must be author)
    body: str


class EditMessageResponse(MessageItem):
    """Edit message response."""

    pass


class EditMessageUseCase:
    """Use case for editing the body of a message."""

    def __init__(self, message_service: MessageService) -> None:
        """Initialize edit message use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: EditMessageRequest) -> EditMessageResponse:
        """Execute edit message flow.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the new body is invalid
        """
        message = await self.message_service.edit_message(
            message_id=MessageId(request.message_id),
            user_id=UserId(UUID(request.user_id)),
            body=request.body,
        )
        return EditMessageResponse(**MessageItem.from_domain(message).model_dump())

"""Delete message use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.domain.service import MessageService
from huddle.domain.value import MessageId, UserId


class DeleteMessageRequest(BaseModel):
    """Delete message request."""

    message_id: int
    user_id: str  # Current user ID (must be author)


class DeleteMessageUseCase:
    """Use case for deleting a message.

    Replies to the deleted message stay in the thread as top-level messages.
    """

    def __init__(self, message_service: MessageService) -> None:
        """Initialize delete message use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: DeleteMessageRequest) -> None:
        """Execute delete message flow.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
        """
        await self.message_service.delete_message(
            message_id=MessageId(request.message_id),
            user_id=UserId(UUID(request.user_id)),
        )

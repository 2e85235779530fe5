"""Toggle reaction use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.store import parse_emoji
from huddle.domain.service import MessageService
from huddle.domain.value import MessageId, UserId

from .list_messages import ReactionItem


class ToggleReactionRequest(BaseModel):
    """Toggle reaction request."""

    message_id: int
    user_id: str  # User ID from authenticated user
    emoji: str


class ToggleReactionResponse(BaseModel):
    """Toggle reaction response."""

    message_id: int
    emoji: str
    added: bool  # False when the reaction was removed
    reactions: list[ReactionItem]  # Reactions on the message afterwards


class ToggleReactionUseCase:
    """Use case for adding or removing the user's reaction on a message."""

    def __init__(self, message_service: MessageService) -> None:
        """Initialize toggle reaction use case.

        Args:
            message_service: Message domain service
        """
        self.message_service = message_service

    async def execute(self, request: ToggleReactionRequest) -> ToggleReactionResponse:
        """Execute toggle reaction flow.

        Raises:
            ValidationError: If the emoji is invalid
            NotFoundError: If the message does not exist
        """
        message_id = MessageId(request.message_id)
        emoji = parse_emoji(request.emoji)

        added = await self.message_service.toggle_reaction(
            message_id=message_id,
            user_id=UserId(UUID(request.user_id)),
            emoji=emoji,
        )
        message = await self.message_service.get_message(message_id)

        return ToggleReactionResponse(
            message_id=message_id,
            emoji=emoji.root,
            added=added,
            reactions=[
                ReactionItem(emoji=r.emoji.root, user_id=str(r.user_id))
                for r in message.reactions
            ],
        )

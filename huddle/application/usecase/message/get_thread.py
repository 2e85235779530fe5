"""Get thread comment tree use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.config import ThreadSettings
from huddle.domain.service import (
    CommentTreeBuilder,
    CommentView,
    DepthPolicy,
    JWTService,
    MessageService,
    RenderContext,
    render_forest,
)
from huddle.domain.value import ThreadId

from .list_messages import AttachmentItem


class ReactionSummaryItem(BaseModel):
    """Reactions with one emoji on a comment."""

    emoji: str
    count: int
    user_ids: list[str]
    reacted_by_me: bool


class CommentViewItem(BaseModel):
    """Comment as shown in a thread, with its visible replies."""

    message_id: int
    author_id: str
    body: str
    reply_to: int | None  # Parent for replies, None for top-level
    depth: int  # True depth in the reply tree
    level: int  # Indentation level, capped at max_depth
    is_edited: bool
    created_at: datetime
    updated_at: datetime
    can_reply: bool
    can_edit: bool
    can_delete: bool
    author_relationship: str | None  # "self" for the viewer's own comments, else None
    reactions: list[ReactionSummaryItem]
    attachments: list[AttachmentItem]
    children: list["CommentViewItem"]

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentViewItem":
        """Convert a rendered view, children included.

        Uses an explicit stack so deep threads cannot hit the recursion
        limit.
        """
        root = cls._from_single(view)
        stack = [(view, root)]
        while stack:
            source, item = stack.pop()
            for child in source.children:
                child_item = cls._from_single(child)
                item.children.append(child_item)
                stack.append((child, child_item))
        return root

    @classmethod
    def _from_single(cls, view: CommentView) -> "CommentViewItem":
        return cls(
            message_id=view.message_id,
            author_id=str(view.author_id),
            body=view.body,
            reply_to=view.reply_to,
            depth=view.depth,
            level=view.level,
            is_edited=view.is_edited,
            created_at=view.created_at,
            updated_at=view.updated_at,
            can_reply=view.can_reply,
            can_edit=view.can_edit,
            can_delete=view.can_delete,
            author_relationship=(
                view.author_relationship.value if view.author_relationship else None
            ),
            reactions=[
                ReactionSummaryItem(
                    emoji=r.emoji,
                    count=r.count,
                    user_ids=[str(u) for u in r.user_ids],
                    reacted_by_me=r.reacted_by_me,
                )
                for r in view.reactions
            ],
            attachments=[AttachmentItem.from_domain(a) for a in view.attachments],
            children=[],
        )


class GetThreadRequest(BaseModel):
    """Get thread request."""

    thread_id: str  # UUID string
    auth_token: str | None = None  # JWT token for authentication (optional)


class GetThreadResponse(BaseModel):
    """Get thread response."""

    thread_id: str
    comments: list[CommentViewItem]
    total: int  # Number of messages, at any depth
    max_depth: int
    reactions: list[str]  # Reaction palette offered by the UI


class GetThreadUseCase(BaseUseCase):
    """Use case for getting a thread as a depth-limited comment tree.

    The API has no source of follow or connection data, so the render
    context carries no relationship lookup: ``author_relationship`` is
    ``"self"`` on the viewer's own comments and None everywhere else.
    Clients that know the social graph can render with a ``ThreadSession``
    and their own ``relationship_lookup``.
    """

    def __init__(
        self,
        message_service: MessageService,
        jwt_service: JWTService,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize get thread use case.

        Args:
            message_service: Message domain service
            jwt_service: JWT service for decoding auth tokens
            thread_settings: Nesting depth and reaction palette
        """
        self.message_service = message_service
        self.jwt_service = jwt_service
        self.thread_settings = thread_settings
        self.policy = DepthPolicy(max_depth=thread_settings.max_depth)
        self.builder = CommentTreeBuilder()

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Fetch the flat message list
        2. Build the reply forest
        3. Render it for the viewer (anonymous if the token is missing or
           invalid)

        Args:
            request: Get thread request with thread ID and optional auth token

        Returns:
            Root comments with nested replies
        """
        thread_id = ThreadId(UUID(request.thread_id))
        messages = await self.message_service.list_thread_messages(thread_id)

        forest = self.builder.build_forest(messages)
        context = RenderContext(
            current_user_id=self.jwt_service.get_user_id_from_token(request.auth_token)
        )
        views = render_forest(forest, self.policy, context)

        return GetThreadResponse(
            thread_id=request.thread_id,
            comments=[CommentViewItem.from_view(view) for view in views],
            total=len(messages),
            max_depth=self.policy.max_depth,
            reactions=list(self.thread_settings.reactions),
        )

"""Domain services."""

from .attachment_service import AttachmentService, ObjectStorage
from .base import Service
from .comment_tree import CommentNode, CommentTreeBuilder, DepthPolicy
from .jwt_service import JWTService
from .message_service import MessageService
from .thread_view import (
    CommentView,
    ReactionSummary,
    RenderContext,
    group_reactions,
    render_forest,
)

__all__ = [
    "AttachmentService",
    "CommentNode",
    "CommentTreeBuilder",
    "CommentView",
    "DepthPolicy",
    "JWTService",
    "MessageService",
    "ObjectStorage",
    "ReactionSummary",
    "RenderContext",
    "Service",
    "group_reactions",
    "render_forest",
]

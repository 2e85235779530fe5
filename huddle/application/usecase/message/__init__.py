"""Message use cases."""

from .delete_message import DeleteMessageRequest, DeleteMessageUseCase
from .edit_message import EditMessageRequest, EditMessageResponse, EditMessageUseCase
from .get_thread import (
    CommentViewItem,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ReactionSummaryItem,
)
from .list_messages import (
    AttachmentItem,
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
    MessageItem,
    ReactionItem,
)
from .post_message import PostMessageRequest, PostMessageResponse, PostMessageUseCase
from .toggle_reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)
from .upload_attachment import (
    UploadAttachmentRequest,
    UploadAttachmentResponse,
    UploadAttachmentUseCase,
)

__all__ = [
    "AttachmentItem",
    "CommentViewItem",
    "DeleteMessageRequest",
    "DeleteMessageUseCase",
    "EditMessageRequest",
    "EditMessageResponse",
    "EditMessageUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ListMessagesRequest",
    "ListMessagesResponse",
    "ListMessagesUseCase",
    "MessageItem",
    "PostMessageRequest",
    "PostMessageResponse",
    "PostMessageUseCase",
    "ReactionItem",
    "ReactionSummaryItem",
    "ToggleReactionRequest",
    "ToggleReactionResponse",
    "ToggleReactionUseCase",
    "UploadAttachmentRequest",
    "UploadAttachmentResponse",
    "UploadAttachmentUseCase",
]

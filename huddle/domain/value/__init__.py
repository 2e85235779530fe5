"""Domain value objects for Huddle."""

from huddle.domain.value.identifiers import (
    AttachmentId,
    MessageId,
    ThreadId,
    UserId,
)
from huddle.domain.value.types import (
    AttachmentUpload,
    Emoji,
    Reaction,
    RelationshipStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "MessageId",
    "AttachmentId",
    # Types
    "Emoji",
    "Reaction",
    "AttachmentUpload",
    "RelationshipStatus",
]

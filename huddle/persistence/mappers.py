"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from huddle.domain.model import Attachment, Message
from huddle.domain.value import (
    AttachmentId,
    Emoji,
    MessageId,
    Reaction,
    ThreadId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert a message_reactions row to a Reaction value."""
    return Reaction(
        emoji=Emoji(row["reaction_emoji"]),
        user_id=UserId(_uuid(row["user_id"])),
    )


def row_to_attachment(row: Dict[str, Any]) -> Attachment:
    """Convert a message_attachments row to an Attachment."""
    return Attachment(
        id=AttachmentId(_uuid(row["id"])),
        message_id=MessageId(row["message_id"]),
        uploaded_by=UserId(_uuid(row["uploaded_by"])),
        file_name=row["file_name"],
        file_url=row["file_url"],
        content_type=row.get("file_type"),
        size_bytes=row.get("file_size_bytes"),
        created_at=row["created_at"],
    )


def attachment_to_dict(attachment: Attachment) -> Dict[str, Any]:
    """Convert an Attachment to a message_attachments row."""
    return {
        "id": attachment.id,
        "message_id": attachment.message_id,
        "uploaded_by": attachment.uploaded_by,
        "file_name": attachment.file_name,
        "file_url": attachment.file_url,
        "file_type": attachment.content_type,
        "file_size_bytes": attachment.size_bytes,
        "created_at": attachment.created_at,
    }


def row_to_message(
    row: Dict[str, Any],
    reactions: Sequence[Reaction] = (),
    attachments: Sequence[Attachment] = (),
) -> Message:
    """Convert a messages row plus its child rows to a Message.

    Args:
        row: messages row as dict
        reactions: Reactions already mapped for this message
        attachments: Attachments already mapped for this message

    Returns:
        Message domain model
    """
    return Message(
        id=MessageId(row["id"]),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        author_id=UserId(_uuid(row["user_id"])),
        body=row["body"] or "",
        parent_id=(
            MessageId(row["parent_message_id"])
            if row.get("parent_message_id") is not None
            else None
        ),
        is_edited=row["is_edited"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        reactions=tuple(reactions),
        attachments=tuple(attachments),
    )

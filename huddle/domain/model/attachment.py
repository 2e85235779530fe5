"""Attachment entity."""

from datetime import datetime

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import AttachmentId, MessageId, UserId


class Attachment(DomainModel):
    """A file stored in object storage and linked to a message."""

    id: AttachmentId
    message_id: MessageId
    uploaded_by: UserId
    file_name: str = Field(min_length=1, max_length=255)
    file_url: str
    content_type: str | None = None
    size_bytes: int | None = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)

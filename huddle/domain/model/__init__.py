"""Domain model entities for Huddle."""

from huddle.domain.model.attachment import Attachment
from huddle.domain.model.message import Message

__all__ = [
    "Attachment",
    "Message",
]

"""Domain value objects for Huddle threads."""

from enum import Enum

from pydantic import field_validator

from huddle.domain.value.common import RootValueObject, ValueObject
from huddle.domain.value.identifiers import UserId


class Emoji(RootValueObject[str]):
    """A reaction emoji.

    Any short, non-blank grapheme sequence is accepted; the palette offered
    by the UI is configuration, not a domain rule.
    """

    @field_validator("root")
    @classmethod
    def validate_emoji(cls, v: str) -> str:
        """Validate emoji is non-blank and short."""
        if not v.strip():
            raise ValueError("Emoji must not be blank")
        if len(v) > 16:
            raise ValueError("Emoji must be at most 16 characters")
        return v


class Reaction(ValueObject):
    """One user's reaction to a message.

    A (user, emoji) pair occurs at most once per message.
    """

    emoji: Emoji
    user_id: UserId


class AttachmentUpload(ValueObject):
    """A file waiting to be attached to a message."""

    file_name: str
    content_type: str = "application/octet-stream"
    data: bytes

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """Strip directory components and reject empty names."""
        name = v.replace("\\", "/").rsplit("/", 1)[-1].strip()
        if not name:
            raise ValueError("File name must not be empty")
        if len(name) > 255:
            raise ValueError("File name must be at most 255 characters")
        return name

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class RelationshipStatus(str, Enum):
    """How the viewing user relates to a message author."""

    SELF = "self"
    CONNECTED = "connected"
    PENDING = "pending"
    NONE = "none"

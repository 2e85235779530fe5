"""Message entity.

Messages are the flat records a discussion thread is made of. Replies point
at their parent through ``parent_id``; the tree itself is never stored and is
assembled on read by ``CommentTreeBuilder``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.attachment import Attachment
from huddle.domain.model.common import DomainModel
from huddle.domain.value import MessageId, Reaction, ThreadId, UserId


class Message(DomainModel):
    """Message entity.

    Represents a top-level comment or a reply inside a thread.

    - parent_id: Direct parent message (None for top-level)
    - reactions: Distinct (emoji, user) pairs
    - attachments: Files in upload order
    """

    id: MessageId
    thread_id: ThreadId
    author_id: UserId
    body: str = Field(default="", max_length=10000)
    parent_id: Optional[MessageId] = None
    is_edited: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    reactions: tuple[Reaction, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    def is_authored_by(self, user_id: UserId | None) -> bool:
        """Whether ``user_id`` wrote this message."""
        return user_id is not None and self.author_id == user_id

"""Strongly typed identifiers for Huddle domain entities.

Messages are numbered by the store (bigint identity), everything else is a
UUID. NewType keeps the two kinds of message/thread ids from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ThreadId = NewType("ThreadId", UUID)
MessageId = NewType("MessageId", int)
AttachmentId = NewType("AttachmentId", UUID)

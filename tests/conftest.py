"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import logfire
import pytest

from huddle.domain.model import Message
from huddle.domain.value import Emoji, MessageId, Reaction, ThreadId, UserId

# Keep spans local; app and services log through logfire
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2026, 1, 5, 9, 0, 0)


def make_message(
    message_id: int,
    parent_id: int | None = None,
    thread_id: UUID | None = None,
    author_id: UUID | None = None,
    body: str | None = None,
    reactions: list[tuple[str, UUID]] | None = None,
) -> Message:
    """Helper to build a message for tests.

    Timestamps increase with the id so creation order matches id order.
    """
    created_at = BASE_TIME + timedelta(minutes=message_id)
    return Message(
        id=MessageId(message_id),
        thread_id=ThreadId(thread_id or uuid4()),
        author_id=UserId(author_id or uuid4()),
        body=body if body is not None else f"message {message_id}",
        parent_id=MessageId(parent_id) if parent_id is not None else None,
        created_at=created_at,
        updated_at=created_at,
        reactions=tuple(
            Reaction(emoji=Emoji(emoji), user_id=UserId(user_id))
            for emoji, user_id in reactions or []
        ),
    )


@pytest.fixture
def thread_id() -> ThreadId:
    return ThreadId(uuid4())


@pytest.fixture
def author_id() -> UserId:
    return UserId(uuid4())


@pytest.fixture
def other_user_id() -> UserId:
    return UserId(uuid4())

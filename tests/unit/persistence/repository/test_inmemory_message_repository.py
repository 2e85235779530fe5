"""Unit tests for InMemoryMessageRepository."""

from uuid import uuid4

import pytest

from huddle.domain.model import Attachment
from huddle.domain.value import AttachmentId, Emoji, MessageId, Reaction
from huddle.persistence.repository.inmemory import InMemoryMessageRepository
from tests.conftest import make_message


class TestInMemoryMessageRepository:
    """Tests for the in-memory repository used by mocked containers."""

    @pytest.mark.asyncio
    async def test_create_assigns_sequential_ids(self, thread_id, author_id):
        repo = InMemoryMessageRepository()

        first = await repo.create(thread_id, author_id, "One")
        second = await repo.create(thread_id, author_id, "Two", parent_id=first.id)

        assert (first.id, second.id) == (1, 2)
        assert second.parent_id == first.id
        assert await repo.find_by_id(second.id) == second

    @pytest.mark.asyncio
    async def test_find_by_thread_is_ordered_and_scoped(self, thread_id, author_id):
        """Only the thread's messages come back, ordered by id."""
        # Arrange
        repo = InMemoryMessageRepository()
        await repo.save(make_message(3, thread_id=thread_id))
        await repo.save(make_message(1, thread_id=thread_id))
        await repo.save(make_message(2))

        # Act
        messages = await repo.find_by_thread(thread_id)

        # Assert
        assert [m.id for m in messages] == [1, 3]

    @pytest.mark.asyncio
    async def test_update_body_marks_edited(self, thread_id, author_id):
        repo = InMemoryMessageRepository()
        message = await repo.create(thread_id, author_id, "Old")

        updated = await repo.update_body(message.id, "New")

        assert updated.body == "New"
        assert updated.is_edited
        assert await repo.update_body(MessageId(99), "New") is None

    @pytest.mark.asyncio
    async def test_delete_detaches_replies(self, thread_id, author_id):
        # Arrange
        repo = InMemoryMessageRepository()
        root = await repo.create(thread_id, author_id, "Root")
        reply = await repo.create(thread_id, author_id, "Reply", parent_id=root.id)

        # Act
        deleted = await repo.delete(root.id)

        # Assert
        assert deleted
        assert await repo.find_by_id(root.id) is None
        assert (await repo.find_by_id(reply.id)).parent_id is None
        assert not await repo.delete(root.id)

    @pytest.mark.asyncio
    async def test_reactions_are_distinct(self, thread_id, author_id):
        repo = InMemoryMessageRepository()
        message = await repo.create(thread_id, author_id, "Hi")
        emoji = Emoji("👍")

        assert await repo.add_reaction(message.id, author_id, emoji)
        assert not await repo.add_reaction(message.id, author_id, emoji)
        assert await repo.has_reaction(message.id, author_id, emoji)
        assert (await repo.find_by_id(message.id)).reactions == (
            Reaction(emoji=emoji, user_id=author_id),
        )

        assert await repo.remove_reaction(message.id, author_id, emoji)
        assert not await repo.remove_reaction(message.id, author_id, emoji)
        assert (await repo.find_by_id(message.id)).reactions == ()

    @pytest.mark.asyncio
    async def test_add_attachment_keeps_upload_order(self, thread_id, author_id):
        repo = InMemoryMessageRepository()
        message = await repo.create(thread_id, author_id, "")

        for name in ("a.txt", "b.txt"):
            await repo.add_attachment(
                Attachment(
                    id=AttachmentId(uuid4()),
                    message_id=message.id,
                    uploaded_by=author_id,
                    file_name=name,
                    file_url=f"memory://bucket/{name}",
                )
            )

        stored = await repo.find_by_id(message.id)
        assert [a.file_name for a in stored.attachments] == ["a.txt", "b.txt"]

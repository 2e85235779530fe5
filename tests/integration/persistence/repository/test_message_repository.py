"""Integration tests for PostgresMessageRepository.

These tests need a migrated PostgreSQL database at DATABASE__URL.
"""

from uuid import uuid4

import pytest

from huddle.domain.model import Attachment
from huddle.domain.repository import MessageRepository
from huddle.domain.value import AttachmentId, Emoji, Reaction
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestMessageRepositoryIntegration:
    """Integration tests for PostgresMessageRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_thread(
        self, integration_env, thread_id, author_id
    ):
        """Messages come back in creation order with their parent links."""
        # Arrange
        repo = await integration_env.get(MessageRepository)
        root = await repo.create(thread_id, author_id, "Root")
        reply = await repo.create(thread_id, author_id, "Reply", parent_id=root.id)

        # Act
        messages = await repo.find_by_thread(thread_id)

        # Assert
        assert [m.id for m in messages] == [root.id, reply.id]
        assert messages[1].parent_id == root.id
        assert messages[0].thread_id == thread_id
        assert messages[0].author_id == author_id

    @pytest.mark.asyncio
    async def test_delete_detaches_replies(self, integration_env, thread_id, author_id):
        """Deleting a parent keeps the reply with no parent."""
        repo = await integration_env.get(MessageRepository)
        root = await repo.create(thread_id, author_id, "Root")
        reply = await repo.create(thread_id, author_id, "Reply", parent_id=root.id)

        assert await repo.delete(root.id)

        found = await repo.find_by_id(reply.id)
        assert found is not None
        assert found.parent_id is None
        assert await repo.find_by_id(root.id) is None

    @pytest.mark.asyncio
    async def test_reactions_round_trip(
        self, integration_env, thread_id, author_id, other_user_id
    ):
        """Duplicate reactions are ignored by the unique constraint."""
        # Arrange
        repo = await integration_env.get(MessageRepository)
        message = await repo.create(thread_id, author_id, "Hi")
        emoji = Emoji("🧠")

        # Act
        added = await repo.add_reaction(message.id, other_user_id, emoji)
        duplicate = await repo.add_reaction(message.id, other_user_id, emoji)
        found = await repo.find_by_id(message.id)

        # Assert
        assert added
        assert not duplicate
        assert found.reactions == (Reaction(emoji=emoji, user_id=other_user_id),)
        assert await repo.has_reaction(message.id, other_user_id, emoji)
        assert await repo.remove_reaction(message.id, other_user_id, emoji)
        assert not await repo.has_reaction(message.id, other_user_id, emoji)

    @pytest.mark.asyncio
    async def test_update_body_and_attachments(
        self, integration_env, thread_id, author_id
    ):
        repo = await integration_env.get(MessageRepository)
        message = await repo.create(thread_id, author_id, "Draft")
        await repo.add_attachment(
            Attachment(
                id=AttachmentId(uuid4()),
                message_id=message.id,
                uploaded_by=author_id,
                file_name="fig1.png",
                file_url="https://storage.example.com/fig1.png",
                content_type="image/png",
                size_bytes=1024,
            )
        )

        updated = await repo.update_body(message.id, "Final")

        assert updated.body == "Final"
        assert updated.is_edited
        assert [a.file_name for a in updated.attachments] == ["fig1.png"]

"""Unit tests for MessageService."""

from uuid import uuid4

import pytest

from huddle.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from huddle.domain.repository import MessageRepository
from huddle.domain.service import MessageService
from huddle.domain.value import Emoji, MessageId, ThreadId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestPostMessage:
    """Tests for MessageService.post_message."""

    @pytest.mark.asyncio
    async def test_post_top_level_message(self, unit_env, thread_id, author_id):
        """Posting creates a top-level message with a fresh id."""
        # Arrange
        service = await unit_env.get(MessageService)

        # Act
        message = await service.post_message(thread_id, author_id, "Hello thread")

        # Assert
        assert message.id is not None
        assert message.thread_id == thread_id
        assert message.author_id == author_id
        assert message.body == "Hello thread"
        assert message.parent_id is None
        assert not message.is_edited

    @pytest.mark.asyncio
    async def test_post_reply(self, unit_env, thread_id, author_id, other_user_id):
        """A reply records its parent."""
        service = await unit_env.get(MessageService)
        parent = await service.post_message(thread_id, author_id, "Question?")

        reply = await service.post_message(
            thread_id, other_user_id, "Answer", parent_id=parent.id
        )

        assert reply.parent_id == parent.id
        messages = await service.list_thread_messages(thread_id)
        assert [m.id for m in messages] == [parent.id, reply.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", "   ", "\n\t"])
    async def test_empty_body_rejected(self, unit_env, thread_id, author_id, body):
        """A message needs text unless files are attached."""
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError):
            await service.post_message(thread_id, author_id, body)

    @pytest.mark.asyncio
    async def test_empty_body_allowed_with_attachments(
        self, unit_env, thread_id, author_id
    ):
        service = await unit_env.get(MessageService)

        message = await service.post_message(
            thread_id, author_id, "", has_attachments=True
        )

        assert message.body == ""

    @pytest.mark.asyncio
    async def test_body_too_long_rejected(self, unit_env, thread_id, author_id):
        service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError):
            await service.post_message(
                thread_id, author_id, "x" * (service.max_body_length + 1)
            )

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, unit_env, thread_id, author_id):
        service = await unit_env.get(MessageService)

        with pytest.raises(NotFoundError):
            await service.post_message(
                thread_id, author_id, "Reply", parent_id=MessageId(999)
            )

    @pytest.mark.asyncio
    async def test_parent_in_other_thread_rejected(
        self, unit_env, thread_id, author_id
    ):
        """Replies must stay inside the parent's thread."""
        service = await unit_env.get(MessageService)
        parent = await service.post_message(ThreadId(uuid4()), author_id, "Elsewhere")

        with pytest.raises(ValidationError):
            await service.post_message(
                thread_id, author_id, "Reply", parent_id=parent.id
            )


class TestEditAndDelete:
    """Tests for edit_message and delete_message."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env, thread_id, author_id):
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "Draft")

        edited = await service.edit_message(message.id, author_id, "Final")

        assert edited.body == "Final"
        assert edited.is_edited

    @pytest.mark.asyncio
    async def test_non_author_cannot_edit(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        """Authorship is enforced by the service, not the client."""
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "Mine")

        with pytest.raises(NotAuthorizedError):
            await service.edit_message(message.id, other_user_id, "Hijacked")

        stored = await service.get_message(message.id)
        assert stored.body == "Mine"
        assert not stored.is_edited

    @pytest.mark.asyncio
    async def test_edit_to_empty_rejected(self, unit_env, thread_id, author_id):
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "Text")

        with pytest.raises(ValidationError):
            await service.edit_message(message.id, author_id, "  ")

    @pytest.mark.asyncio
    async def test_edit_missing_message(self, unit_env, author_id):
        service = await unit_env.get(MessageService)

        with pytest.raises(NotFoundError):
            await service.edit_message(MessageId(404), author_id, "Text")

    @pytest.mark.asyncio
    async def test_delete_keeps_replies_as_top_level(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        """Deleting a parent turns its replies into top-level messages."""
        # Arrange
        service = await unit_env.get(MessageService)
        parent = await service.post_message(thread_id, author_id, "Parent")
        reply = await service.post_message(
            thread_id, other_user_id, "Reply", parent_id=parent.id
        )

        # Act
        await service.delete_message(parent.id, author_id)

        # Assert
        messages = await service.list_thread_messages(thread_id)
        assert [m.id for m in messages] == [reply.id]
        assert messages[0].parent_id is None

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "Mine")

        with pytest.raises(NotAuthorizedError):
            await service.delete_message(message.id, other_user_id)

        assert await service.get_message(message.id) == message


class TestToggleReaction:
    """Tests for toggle_reaction."""

    @pytest.mark.asyncio
    async def test_toggle_adds_then_removes(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        """Toggling twice leaves the reactions as they were."""
        # Arrange
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "React to me")
        emoji = Emoji("🔥")

        # Act
        added = await service.toggle_reaction(message.id, other_user_id, emoji)
        after_add = await service.get_message(message.id)
        removed = await service.toggle_reaction(message.id, other_user_id, emoji)
        after_remove = await service.get_message(message.id)

        # Assert
        assert added is True
        assert [(r.emoji.root, r.user_id) for r in after_add.reactions] == [
            ("🔥", other_user_id)
        ]
        assert removed is False
        assert after_remove.reactions == message.reactions

    @pytest.mark.asyncio
    async def test_reactions_are_per_user_and_emoji(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        service = await unit_env.get(MessageService)
        message = await service.post_message(thread_id, author_id, "Hi")

        await service.toggle_reaction(message.id, author_id, Emoji("👍"))
        await service.toggle_reaction(message.id, other_user_id, Emoji("👍"))
        await service.toggle_reaction(message.id, other_user_id, Emoji("🧠"))

        stored = await service.get_message(message.id)
        assert len(stored.reactions) == 3

    @pytest.mark.asyncio
    async def test_toggle_on_missing_message(self, unit_env, author_id):
        service = await unit_env.get(MessageService)

        with pytest.raises(NotFoundError):
            await service.toggle_reaction(MessageId(77), author_id, Emoji("👍"))

    @pytest.mark.asyncio
    async def test_shares_repository_with_container(
        self, unit_env, thread_id, author_id
    ):
        """Services and repository resolved from one container see the same data."""
        service = await unit_env.get(MessageService)
        repository = await unit_env.get(MessageRepository)

        message = await service.post_message(thread_id, author_id, "Stored")

        assert await repository.find_by_id(message.id) == message

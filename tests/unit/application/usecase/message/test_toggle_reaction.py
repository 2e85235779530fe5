"""Unit tests for ToggleReactionUseCase, EditMessageUseCase and DeleteMessageUseCase."""

import pytest

from huddle.application.usecase.message import (
    DeleteMessageRequest,
    DeleteMessageUseCase,
    EditMessageRequest,
    EditMessageUseCase,
    ToggleReactionRequest,
    ToggleReactionUseCase,
)
from huddle.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from huddle.domain.service import MessageService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestToggleReactionUseCase:
    """Tests for ToggleReactionUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_twice_is_a_no_op(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        """Adding then removing a reaction restores the original reactions."""
        # Arrange
        message_service = await unit_env.get(MessageService)
        use_case = await unit_env.get(ToggleReactionUseCase)
        message = await message_service.post_message(thread_id, author_id, "Hi")
        request = ToggleReactionRequest(
            message_id=message.id, user_id=str(other_user_id), emoji="🧠"
        )

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert first.added is True
        assert [(r.emoji, r.user_id) for r in first.reactions] == [
            ("🧠", str(other_user_id))
        ]
        assert second.added is False
        assert second.reactions == []

    @pytest.mark.asyncio
    async def test_blank_emoji_rejected(self, unit_env, thread_id, author_id):
        message_service = await unit_env.get(MessageService)
        use_case = await unit_env.get(ToggleReactionUseCase)
        message = await message_service.post_message(thread_id, author_id, "Hi")

        with pytest.raises(ValidationError):
            await use_case.execute(
                ToggleReactionRequest(
                    message_id=message.id, user_id=str(author_id), emoji=" "
                )
            )


class TestEditAndDeleteUseCases:
    """Tests for EditMessageUseCase and DeleteMessageUseCase."""

    @pytest.mark.asyncio
    async def test_edit_returns_updated_message(self, unit_env, thread_id, author_id):
        message_service = await unit_env.get(MessageService)
        use_case = await unit_env.get(EditMessageUseCase)
        message = await message_service.post_message(thread_id, author_id, "Old")

        response = await use_case.execute(
            EditMessageRequest(message_id=message.id, user_id=str(author_id), body="New")
        )

        assert response.body == "New"
        assert response.is_edited

    @pytest.mark.asyncio
    async def test_edit_by_other_user_rejected(
        self, unit_env, thread_id, author_id, other_user_id
    ):
        message_service = await unit_env.get(MessageService)
        use_case = await unit_env.get(EditMessageUseCase)
        message = await message_service.post_message(thread_id, author_id, "Old")

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                EditMessageRequest(
                    message_id=message.id, user_id=str(other_user_id), body="New"
                )
            )

    @pytest.mark.asyncio
    async def test_delete_then_missing(self, unit_env, thread_id, author_id):
        message_service = await unit_env.get(MessageService)
        use_case = await unit_env.get(DeleteMessageUseCase)
        message = await message_service.post_message(thread_id, author_id, "Bye")

        await use_case.execute(
            DeleteMessageRequest(message_id=message.id, user_id=str(author_id))
        )

        with pytest.raises(NotFoundError):
            await message_service.get_message(message.id)

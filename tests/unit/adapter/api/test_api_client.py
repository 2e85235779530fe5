"""Unit tests for HttpMessageStore."""

import json
from uuid import uuid4

import httpx
import pytest

from huddle.adapter.api import HttpMessageStore
from huddle.application.usecase.message import ListMessagesResponse, MessageItem
from huddle.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from huddle.domain.value import AttachmentUpload, MessageId
from tests.conftest import make_message


def make_store(handler, auth_token: str | None = "token-123") -> HttpMessageStore:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://api.test"
    )
    return HttpMessageStore(client, auth_token=auth_token)


def message_json(message) -> dict:
    return MessageItem.from_domain(message).model_dump(mode="json")


class TestHttpMessageStore:
    """Tests for HttpMessageStore requests and responses."""

    @pytest.mark.asyncio
    async def test_list_messages(self, thread_id, author_id):
        """Should fetch the flat list and rebuild domain messages."""
        # Arrange
        messages = [
            make_message(1, thread_id=thread_id, author_id=author_id),
            make_message(
                2,
                parent_id=1,
                thread_id=thread_id,
                author_id=author_id,
                reactions=[("👍", author_id)],
            ),
        ]
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            payload = ListMessagesResponse(
                thread_id=str(thread_id),
                messages=[MessageItem.from_domain(m) for m in messages],
                total=2,
            )
            return httpx.Response(200, json=payload.model_dump(mode="json"))

        store = make_store(handler)

        # Act
        result = await store.list_messages(thread_id)

        # Assert
        assert requests[0].method == "GET"
        assert requests[0].url.path == f"/threads/{thread_id}/messages"
        assert requests[0].headers["Cookie"] == "auth_token=token-123"
        assert result == messages

    @pytest.mark.asyncio
    async def test_anonymous_store_sends_no_cookie(self, thread_id):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200, json={"thread_id": str(thread_id), "messages": [], "total": 0}
            )

        store = make_store(handler, auth_token=None)

        assert await store.list_messages(thread_id) == []
        assert "Cookie" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_post_reply_as_form(self, thread_id, author_id):
        reply = make_message(5, parent_id=4, thread_id=thread_id, author_id=author_id)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json=message_json(reply))

        store = make_store(handler)

        result = await store.post_message(thread_id, "Agreed", parent_id=MessageId(4))

        assert result == reply
        assert requests[0].method == "POST"
        assert requests[0].headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert b"body=Agreed" in requests[0].content
        assert b"parent_id=4" in requests[0].content

    @pytest.mark.asyncio
    async def test_post_with_files_is_multipart(self, thread_id, author_id):
        created = make_message(1, thread_id=thread_id, author_id=author_id, body="")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json=message_json(created))

        store = make_store(handler)

        await store.post_message(
            thread_id,
            "",
            attachments=[
                AttachmentUpload(file_name="notes.txt", content_type="text/plain", data=b"hello")
            ],
        )

        content = requests[0].content
        assert requests[0].headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="files"; filename="notes.txt"' in content
        assert b"hello" in content

    @pytest.mark.asyncio
    async def test_edit_sends_json(self, thread_id, author_id):
        edited = make_message(3, thread_id=thread_id, author_id=author_id, body="Fixed")
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=message_json(edited))

        store = make_store(handler)

        result = await store.edit_message(MessageId(3), "Fixed")

        assert result.body == "Fixed"
        assert requests[0].method == "PATCH"
        assert requests[0].url.path == "/messages/3"
        assert json.loads(requests[0].content) == {"body": "Fixed"}

    @pytest.mark.asyncio
    async def test_toggle_reaction_returns_added(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"emoji": "🔥"}
            return httpx.Response(
                200,
                json={"message_id": 3, "emoji": "🔥", "added": False, "reactions": []},
            )

        store = make_store(handler)

        assert await store.toggle_reaction(MessageId(3), "🔥") is False

    @pytest.mark.asyncio
    async def test_delete(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        store = make_store(handler)

        await store.delete_message(MessageId(9))

        assert requests[0].method == "DELETE"
        assert requests[0].url.path == "/messages/9"


class TestHttpMessageStoreErrors:
    """Tests for mapping HTTP failures to domain errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "error_type"),
        [
            (400, ValidationError),
            (422, ValidationError),
            (401, NotAuthorizedError),
            (403, NotAuthorizedError),
            (404, NotFoundError),
            (500, TransientStoreError),
            (503, TransientStoreError),
        ],
    )
    async def test_status_mapping(self, status_code, error_type):
        store = make_store(
            lambda request: httpx.Response(status_code, json={"detail": "nope"})
        )

        with pytest.raises(error_type):
            await store.delete_message(MessageId(1))

    @pytest.mark.asyncio
    async def test_validation_detail_is_kept(self):
        store = make_store(
            lambda request: httpx.Response(
                400, json={"detail": "Message must have text or attachments"}
            )
        )

        with pytest.raises(ValidationError, match="text or attachments"):
            await store.edit_message(MessageId(1), "")

    @pytest.mark.asyncio
    async def test_transport_failure_is_transient(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        store = make_store(handler)

        with pytest.raises(TransientStoreError):
            await store.list_messages(uuid4())

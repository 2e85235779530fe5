"""HTTP client for the Huddle API.

Implements ``MessageStore`` on top of the REST routes, so a thread session
can run against a remote server exactly as it does in-process. HTTP
failures are translated back into domain errors.
"""

from collections.abc import Sequence
from typing import Any

import httpx
import logfire

from huddle.application.store import MessageStore
from huddle.application.usecase.message import (
    AttachmentItem,
    EditMessageResponse,
    ListMessagesResponse,
    PostMessageResponse,
    ToggleReactionResponse,
)
from huddle.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from huddle.domain.model import Attachment, Message
from huddle.domain.value import AttachmentUpload, MessageId, ThreadId


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, str):
        return detail
    if detail:
        return str(detail)
    return response.text[:200] or f"HTTP {response.status_code}"


class HttpMessageStore(MessageStore):
    """Message store that talks to the Huddle API over HTTP.

    The client should be created with the API's ``base_url``; the acting
    user is whoever the ``auth_token`` belongs to.
    """

    def __init__(self, client: httpx.AsyncClient, auth_token: str | None = None) -> None:
        """Initialize API client.

        Args:
            client: HTTP client with ``base_url`` pointing at the API
            auth_token: JWT sent as the ``auth_token`` cookie
        """
        self.client = client
        self.auth_token = auth_token

    def _headers(self) -> dict[str, str]:
        if self.auth_token is None:
            return {}
        return {"Cookie": f"auth_token={self.auth_token}"}

    async def _request(
        self,
        method: str,
        url: str,
        resource: str,
        resource_id: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and map failures to domain errors.

        Raises:
            ValidationError: On 400 or 422
            NotAuthorizedError: On 401 or 403
            NotFoundError: On 404
            TransientStoreError: On any other failure
        """
        try:
            response = await self.client.request(
                method, url, headers=self._headers(), **kwargs
            )
        except httpx.HTTPError as e:
            logfire.error("API request failed", method=method, url=url, error=str(e))
            raise TransientStoreError(f"Request to {url} failed: {e}") from e

        if response.is_success:
            return response

        status_code = response.status_code
        logfire.warn(
            "API request rejected", method=method, url=url, status_code=status_code
        )
        if status_code in (400, 422):
            raise ValidationError(_detail(response))
        if status_code in (401, 403):
            raise NotAuthorizedError(resource, resource_id)
        if status_code == 404:
            raise NotFoundError(resource.capitalize(), resource_id)
        raise TransientStoreError(
            f"{method} {url} failed with status {status_code}: {_detail(response)}"
        )

    async def list_messages(self, thread_id: ThreadId) -> list[Message]:
        response = await self._request(
            "GET", f"/threads/{thread_id}/messages", "thread", str(thread_id)
        )
        payload = ListMessagesResponse.model_validate(response.json())
        return [item.to_domain() for item in payload.messages]

    async def post_message(
        self,
        thread_id: ThreadId,
        body: str,
        parent_id: MessageId | None = None,
        attachments: Sequence[AttachmentUpload] = (),
    ) -> Message:
        data = {"body": body}
        if parent_id is not None:
            data["parent_id"] = str(parent_id)
        files = [
            ("files", (upload.file_name, upload.data, upload.content_type))
            for upload in attachments
        ]

        response = await self._request(
            "POST",
            f"/threads/{thread_id}/messages",
            "thread",
            str(thread_id),
            data=data,
            files=files or None,
        )
        return PostMessageResponse.model_validate(response.json()).to_domain()

    async def edit_message(self, message_id: MessageId, new_body: str) -> Message:
        response = await self._request(
            "PATCH",
            f"/messages/{message_id}",
            "message",
            str(message_id),
            json={"body": new_body},
        )
        return EditMessageResponse.model_validate(response.json()).to_domain()

    async def delete_message(self, message_id: MessageId) -> None:
        await self._request(
            "DELETE", f"/messages/{message_id}", "message", str(message_id)
        )

    async def toggle_reaction(self, message_id: MessageId, emoji: str) -> bool:
        response = await self._request(
            "POST",
            f"/messages/{message_id}/reactions",
            "message",
            str(message_id),
            json={"emoji": emoji},
        )
        return ToggleReactionResponse.model_validate(response.json()).added

    async def upload_attachment(
        self, message_id: MessageId, upload: AttachmentUpload
    ) -> Attachment:
        response = await self._request(
            "POST",
            f"/messages/{message_id}/attachments",
            "message",
            str(message_id),
            files={"file": (upload.file_name, upload.data, upload.content_type)},
        )
        return AttachmentItem.model_validate(response.json()).to_domain()

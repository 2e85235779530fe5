"""Message routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from huddle.application.usecase.message import (
    DeleteMessageRequest,
    DeleteMessageUseCase,
    EditMessageRequest,
    EditMessageResponse,
    EditMessageUseCase,
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
    UploadAttachmentRequest,
    UploadAttachmentResponse,
    UploadAttachmentUseCase,
)
from huddle.domain.service import JWTService
from huddle.domain.value import UserId
from huddle.interface.api.routes.threads import read_upload
from huddle.interface.error import HANDLED_ERRORS, to_http_exception

router = APIRouter(prefix="/messages", tags=["messages"], route_class=DishkaRoute)


def require_user(jwt_service: JWTService, auth_token: str | None, action: str) -> UserId:
    """Resolve the acting user or reject the request with 401."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


class EditMessageAPIRequest(BaseModel):
    """API request for editing a message."""

    body: str = Field(max_length=10000)


@router.patch("/{message_id}", response_model=EditMessageResponse)
async def edit_message(
    message_id: int,
    request: EditMessageAPIRequest,
    edit_message_use_case: FromDishka[EditMessageUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EditMessageResponse:
    """Edit a message's body.

    Only the author can edit.

    Args:
        message_id: Message ID
        request: New body
        edit_message_use_case: Edit message use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Updated message
    """
    user_id = require_user(jwt_service, auth_token, "edit messages")
    try:
        use_case_request = EditMessageRequest(
            message_id=message_id, user_id=str(user_id), body=request.body
        )
        return await edit_message_use_case.execute(use_case_request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "edit this message") from e


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: int,
    delete_message_use_case: FromDishka[DeleteMessageUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a message.

    Only the author can delete. Replies stay and become top-level.

    Args:
        message_id: Message ID
        delete_message_use_case: Delete message use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
    """
    user_id = require_user(jwt_service, auth_token, "delete messages")
    try:
        await delete_message_use_case.execute(
            DeleteMessageRequest(message_id=message_id, user_id=str(user_id))
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "delete this message") from e


class ToggleReactionAPIRequest(BaseModel):
    """API request for toggling a reaction."""

    emoji: str


@router.post("/{message_id}/reactions", response_model=ToggleReactionResponse)
async def toggle_reaction(
    message_id: int,
    request: ToggleReactionAPIRequest,
    toggle_reaction_use_case: FromDishka[ToggleReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleReactionResponse:
    """Add the user's reaction, or remove it if already present.

    Args:
        message_id: Message ID
        request: Emoji to toggle
        toggle_reaction_use_case: Toggle reaction use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Whether the reaction was added, and the message's reactions
    """
    user_id = require_user(jwt_service, auth_token, "react")
    try:
        use_case_request = ToggleReactionRequest(
            message_id=message_id, user_id=str(user_id), emoji=request.emoji
        )
        return await toggle_reaction_use_case.execute(use_case_request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "react to this message") from e


@router.post(
    "/{message_id}/attachments",
    response_model=UploadAttachmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_attachment(
    message_id: int,
    upload_attachment_use_case: FromDishka[UploadAttachmentUseCase],
    jwt_service: FromDishka[JWTService],
    file: UploadFile = File(...),
    auth_token: str | None = Cookie(default=None),
) -> UploadAttachmentResponse:
    """Attach a file to a message.

    Only the author can attach files.

    Args:
        message_id: Message ID
        upload_attachment_use_case: Upload attachment use case from DI
        jwt_service: JWT service for token verification (injected)
        file: Uploaded file (multipart)
        auth_token: JWT token from cookie

    Returns:
        Recorded attachment
    """
    user_id = require_user(jwt_service, auth_token, "upload attachments")
    try:
        use_case_request = UploadAttachmentRequest(
            message_id=message_id,
            user_id=str(user_id),
            upload=await read_upload(file),
        )
        return await upload_attachment_use_case.execute(use_case_request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "attach files to this message") from e

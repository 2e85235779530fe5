"""Thread routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, File, Form, HTTPException, UploadFile, status

from huddle.application.usecase.message import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
    PostMessageRequest,
    PostMessageResponse,
    PostMessageUseCase,
)
from huddle.domain.service import JWTService
from huddle.domain.value import AttachmentUpload
from huddle.interface.error import HANDLED_ERRORS, to_http_exception

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


async def read_upload(file: UploadFile) -> AttachmentUpload:
    """Read an uploaded file into memory."""
    return AttachmentUpload(
        file_name=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        data=await file.read(),
    )


@router.get("/{thread_id}/messages", response_model=ListMessagesResponse)
async def list_messages(
    thread_id: str,
    list_messages_use_case: FromDishka[ListMessagesUseCase],
) -> ListMessagesResponse:
    """Get the flat message list of a thread in creation order.

    Args:
        thread_id: Thread UUID
        list_messages_use_case: List messages use case from DI

    Returns:
        Messages with reactions and attachments
    """
    try:
        request = ListMessagesRequest(thread_id=thread_id)
        return await list_messages_use_case.execute(request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "list messages") from e


@router.get("/{thread_id}/comments", response_model=GetThreadResponse)
async def get_comments(
    thread_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetThreadResponse:
    """Get a thread as a comment tree.

    Replies nest up to the configured maximum depth; deeper replies are
    listed flat at the deepest level. If authenticated, each comment says
    whether the viewer may reply, edit or delete, and which reactions are
    theirs.

    Args:
        thread_id: Thread UUID
        get_thread_use_case: Get thread use case from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        Root comments with nested replies
    """
    try:
        request = GetThreadRequest(thread_id=thread_id, auth_token=auth_token)
        return await get_thread_use_case.execute(request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "get comments") from e


@router.post(
    "/{thread_id}/messages",
    response_model=PostMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    thread_id: str,
    post_message_use_case: FromDishka[PostMessageUseCase],
    jwt_service: FromDishka[JWTService],
    body: str = Form(default=""),
    parent_id: int | None = Form(default=None),
    files: list[UploadFile] | None = File(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PostMessageResponse:
    """Post a message or reply, optionally with files.

    Accepts a form (multipart when files are sent). Requires authentication.

    Args:
        thread_id: Thread UUID
        post_message_use_case: Post message use case from DI
        jwt_service: JWT service for token verification (injected)
        body: Message text
        parent_id: Message being replied to
        files: Attachments
        auth_token: JWT token from cookie

    Returns:
        Created message

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to post messages",
        )

    try:
        attachments = [await read_upload(file) for file in files or []]
        request = PostMessageRequest(
            thread_id=thread_id,
            author_id=str(user_id),
            body=body,
            parent_id=parent_id,
            attachments=attachments,
        )
        return await post_message_use_case.execute(request)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e, "post message") from e

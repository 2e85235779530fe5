"""Upload attachment use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.domain.service import AttachmentService
from huddle.domain.value import AttachmentUpload, MessageId, UserId

from .list_messages import AttachmentItem


class UploadAttachmentRequest(BaseModel):
    """Upload attachment request."""

    message_id: int
    user_id: str  # Current user ID (must be author)
    upload: AttachmentUpload


class UploadAttachmentResponse(AttachmentItem):
    """Upload attachment response."""

    pass


class UploadAttachmentUseCase:
    """Use case for attaching a file to an existing message."""

    def __init__(self, attachment_service: AttachmentService) -> None:
        """Initialize upload attachment use case.

        Args:
            attachment_service: Attachment domain service
        """
        self.attachment_service = attachment_service

    async def execute(
        self, request: UploadAttachmentRequest
    ) -> UploadAttachmentResponse:
        """Execute upload attachment flow.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the user is not the author
            ValidationError: If the file is empty or too large
            StorageError: If object storage fails
        """
        attachment = await self.attachment_service.upload_attachment(
            message_id=MessageId(request.message_id),
            user_id=UserId(UUID(request.user_id)),
            upload=request.upload,
        )
        return UploadAttachmentResponse(
            **AttachmentItem.from_domain(attachment).model_dump()
        )

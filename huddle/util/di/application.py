"""Application layer DI providers."""

from dishka import Scope, provide

from huddle.application.usecase.message import (
    DeleteMessageUseCase,
    EditMessageUseCase,
    GetThreadUseCase,
    ListMessagesUseCase,
    PostMessageUseCase,
    ToggleReactionUseCase,
    UploadAttachmentUseCase,
)
from huddle.config import ThreadSettings
from huddle.domain.service import AttachmentService, JWTService, MessageService
from huddle.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_list_messages_use_case(
        self, message_service: MessageService
    ) -> ListMessagesUseCase:
        """Provide list messages use case."""
        return ListMessagesUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        message_service: MessageService,
        jwt_service: JWTService,
        thread_settings: ThreadSettings,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            message_service=message_service,
            jwt_service=jwt_service,
            thread_settings=thread_settings,
        )

    # Mutation use cases
    @provide(scope=Scope.REQUEST)
    def get_post_message_use_case(
        self,
        message_service: MessageService,
        attachment_service: AttachmentService,
    ) -> PostMessageUseCase:
        """Provide post message use case."""
        return PostMessageUseCase(
            message_service=message_service,
            attachment_service=attachment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_edit_message_use_case(
        self, message_service: MessageService
    ) -> EditMessageUseCase:
        """Provide edit message use case."""
        return EditMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_message_use_case(
        self, message_service: MessageService
    ) -> DeleteMessageUseCase:
        """Provide delete message use case."""
        return DeleteMessageUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_reaction_use_case(
        self, message_service: MessageService
    ) -> ToggleReactionUseCase:
        """Provide toggle reaction use case."""
        return ToggleReactionUseCase(message_service=message_service)

    @provide(scope=Scope.REQUEST)
    def get_upload_attachment_use_case(
        self, attachment_service: AttachmentService
    ) -> UploadAttachmentUseCase:
        """Provide upload attachment use case."""
        return UploadAttachmentUseCase(attachment_service=attachment_service)

"""Domain layer DI providers."""

from dishka import Scope, provide

from huddle.config import AuthSettings, StorageSettings, ThreadSettings
from huddle.domain.repository import MessageRepository
from huddle.domain.service import (
    AttachmentService,
    JWTService,
    MessageService,
    ObjectStorage,
)
from huddle.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_message_service(
        self, message_repository: MessageRepository, thread_settings: ThreadSettings
    ) -> MessageService:
        """Provide message domain service."""
        return MessageService(
            message_repository=message_repository,
            max_body_length=thread_settings.max_body_length,
        )

    @provide
    def get_attachment_service(
        self,
        message_repository: MessageRepository,
        object_storage: ObjectStorage,
        storage_settings: StorageSettings,
    ) -> AttachmentService:
        """Provide attachment domain service."""
        return AttachmentService(
            message_repository=message_repository,
            object_storage=object_storage,
            max_upload_bytes=storage_settings.max_upload_bytes,
        )

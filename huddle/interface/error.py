"""Interface layer errors."""

import logfire
from fastapi import HTTPException, status

from huddle.adapter.error import StorageError
from huddle.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)

# Errors routes translate into responses; anything else is a server bug
HANDLED_ERRORS = (DomainError, StorageError, ValueError)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Map a use case error to an HTTP error response.

    Args:
        error: Error raised by a use case
        action: What was being attempted, for logs and messages

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"Unauthorized attempt to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (ValidationError, ValueError)):
        logfire.warn(f"Validation failed trying to {action}", error=str(error))
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, StorageError):
        logfire.error(f"Storage failed trying to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Attachment storage is unavailable",
        )
    if isinstance(error, TransientStoreError):
        logfire.error(f"Store unavailable trying to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error)
        )
    logfire.error(f"Unexpected error trying to {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )

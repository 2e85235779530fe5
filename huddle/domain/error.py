"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str | None = None):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        who = f"User {user_id}" if user_id else "Current user"
        super().__init__(f"{who} is not authorized to modify {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TransientStoreError(DomainError):
    """Raised when the message store fails for reasons unrelated to the request.

    Callers should surface it to the user and allow a retry.
    """

    pass

"""Domain layer errors.

All of these are recoverable by the caller: re-check the entity's state and
retry with a valid operation. The interface layer surfaces the message as-is.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or oversized input."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthorizedError(DomainError):
    """Raised when an operation requires an identity and none was given."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Authentication required to {operation}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to edit content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to edit {resource} {resource_id}"
        )


class InvalidStateError(DomainError):
    """Operation not valid for the entity's current lifecycle state."""

    pass


class InvalidOperationError(DomainError):
    """Operation structurally disallowed for the entity (e.g. pinning a reply)."""

    pass

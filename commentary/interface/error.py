"""Interface layer errors and domain error translation."""

from fastapi import HTTPException, status

from commentary.domain.error import (
    DomainError,
    InvalidOperationError,
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


STATUS_CODES: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateError: status.HTTP_409_CONFLICT,
    InvalidOperationError: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTP error with its message as detail."""
    for error_type in type(error).__mro__:
        if error_type in STATUS_CODES:
            return HTTPException(status_code=STATUS_CODES[error_type], detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

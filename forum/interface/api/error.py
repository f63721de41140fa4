"""Translation of engine errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from forum.adapter.error import AdapterError, StoreUnavailableError
from forum.domain.error import (
    CounterUnderflowError,
    DomainError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
)

_STATUS_CODES: dict[type[Exception], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CounterUnderflowError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def http_error(exc: DomainError | AdapterError) -> HTTPException:
    """Build the HTTP error for a domain or adapter error.

    Unlisted domain errors are client errors (400); unlisted adapter
    errors are server errors (500). A store outage carries Retry-After,
    since vote submissions are safe to retry.

    Args:
        exc: Error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    default = (
        status.HTTP_400_BAD_REQUEST
        if isinstance(exc, DomainError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    status_code = next(
        (code for error_type, code in _STATUS_CODES.items() if isinstance(exc, error_type)),
        default,
    )
    if status_code >= 500:
        logfire.error(
            "Request failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )

    headers = {"Retry-After": "1"} if isinstance(exc, StoreUnavailableError) else None
    return HTTPException(status_code=status_code, detail=str(exc), headers=headers)

"""
Translation of domain errors into HTTP errors.

Status codes follow the ErrorKind of the error, with a few classes
overriding the default for their kind.
"""

import logging

from fastapi import HTTPException, status

from src.domain.exceptions import (
    EmailNotConfirmed,
    ErrorKind,
    InvalidUser,
    RegistryError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PRECONDITION: status.HTTP_409_CONFLICT,
    ErrorKind.PERSISTENCE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.DELIVERY: status.HTTP_502_BAD_GATEWAY,
}

_STATUS_OVERRIDES: dict[type[RegistryError], int] = {
    InvalidUser: 422,
    EmailNotConfirmed: status.HTTP_403_FORBIDDEN,
}


def to_http_exception(exc: RegistryError) -> HTTPException:
    """Build the HTTPException a route raises for a registry error."""
    status_code = _STATUS_BY_KIND[exc.kind]
    for error_type, override in _STATUS_OVERRIDES.items():
        if isinstance(exc, error_type):
            status_code = override
            break

    if status_code >= 500:
        logger.error("Registry operation failed: %s", exc, exc_info=exc)

    return HTTPException(status_code=status_code, detail=str(exc))

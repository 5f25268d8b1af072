"""
Translation of domain errors into HTTP responses.

Every ``DomainError`` subclass has exactly one status code. The response
``detail`` carries the message, the error category (so callers can tell
"retry later" from "fix your input") and any structured details.
"""

from typing import Dict, Type

from fastapi import HTTPException, status

from bizintel.domain.entities.errors import (
    DomainError,
    InsufficientDataError,
    NotFoundError,
    PersistenceError,
    UpstreamApplicationError,
    UpstreamUnavailableError,
    ValidationError,
)

STATUS_BY_ERROR: Dict[Type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InsufficientDataError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UpstreamUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    UpstreamApplicationError: status.HTTP_502_BAD_GATEWAY,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: DomainError) -> HTTPException:
    return HTTPException(
        status_code=status_for(error),
        detail={
            "message": error.message,
            "category": error.category.value,
            "details": error.details,
        },
    )

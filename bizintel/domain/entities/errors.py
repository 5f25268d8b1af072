"""
Domain Errors

Typed failures raised by the decision pipeline. Every error carries a
category so callers can tell whether to retry later, fix their input,
or stop because there is nothing to act on.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """How a caller should react to a failure."""

    FIX_INPUT = "fix_input"
    NOT_FOUND = "not_found"
    RETRY_LATER = "retry_later"


class DomainError(Exception):
    """Base class for domain errors."""

    category: ErrorCategory = ErrorCategory.FIX_INPUT

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    """Raised when an input is malformed or out of range."""

    category = ErrorCategory.FIX_INPUT


class InsufficientDataError(DomainError):
    """Raised when there is not enough history or no subjects to work on."""

    category = ErrorCategory.FIX_INPUT


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    category = ErrorCategory.NOT_FOUND

    def __init__(
        self,
        resource: str,
        identifier: Any,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with ID {identifier} not found", details)


class UpstreamUnavailableError(DomainError):
    """Raised when the AI service cannot be reached."""

    category = ErrorCategory.RETRY_LATER


class UpstreamApplicationError(DomainError):
    """Raised when the AI service answered with a failure."""

    category = ErrorCategory.RETRY_LATER

    def __init__(
        self,
        message: str,
        upstream_status: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.upstream_status = upstream_status
        super().__init__(message, {"upstream_status": upstream_status, **(details or {})})


class PersistenceError(DomainError):
    """Raised when the store could not commit a write."""

    category = ErrorCategory.RETRY_LATER

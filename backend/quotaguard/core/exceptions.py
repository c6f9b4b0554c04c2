"""Shared exceptions module.

Every user-visible failure carries a stable machine-readable ``kind`` and a
human-readable message. The API layer maps each class to a status code.
"""

import functools
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError


class QuotaGuardException(Exception):
    """Base exception for quotaguard services."""

    kind: str = "internal_error"

    def __init__(self, message: Optional[str] = "Internal error"):
        """Create a new QuotaGuardException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        """Body returned to API callers."""
        return {"error": self.message, "kind": self.kind}


class UnauthenticatedError(QuotaGuardException):
    """Raised when the request carries no valid principal."""

    kind = "unauthenticated"

    def __init__(self, message: Optional[str] = "Unauthorized"):
        """Initialize with default message."""
        super().__init__(message)


class MalformedRequestError(QuotaGuardException):
    """Raised when a request is missing fields or carries invalid values."""

    kind = "malformed_request"

    def __init__(self, message: Optional[str] = "Malformed request", errors: Optional[dict] = None):
        """Initialize with a message and optional per-field errors."""
        self.errors = errors or {}
        super().__init__(message)

    def to_payload(self) -> dict:
        """Include per-field errors when present."""
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class StorageUnavailableError(QuotaGuardException):
    """Raised when the ledger or catalog store cannot be reached.

    The only family retried internally (bounded, with backoff), apart from
    the StorageCommitUncertainError subclass.
    """

    kind = "storage_unavailable"

    def __init__(self, message: Optional[str] = "Storage temporarily unavailable"):
        """Initialize with default message."""
        super().__init__(message)


class StorageCommitUncertainError(StorageUnavailableError):
    """Raised when the connection fails while committing.

    The transaction may or may not have been applied, so the call is never
    retried: a second attempt could count the same operation twice.
    """

    def __init__(self, message: Optional[str] = "Storage commit outcome unknown"):
        """Initialize with default message."""
        super().__init__(message)


TRANSIENT_DB_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, ConnectionError)


def wrap_storage_errors(fn):
    """Decorator: translate transient database failures into StorageUnavailableError."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except TRANSIENT_DB_ERRORS as e:
            raise StorageUnavailableError(f"{fn.__qualname__} failed: {e.__class__.__name__}") from e

    return wrapper


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary keyed by field location.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: The unpacked error details.

    """
    error_messages = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        error_messages[field] = error["msg"]
    return error_messages

"""Custom exception hierarchy for the SBOM storage service."""

from __future__ import annotations

from enum import Enum
from typing import Any


class StorageErrorKind(str, Enum):
    GENERIC = "generic"
    KEY_INVALID = "key_invalid"
    FILE_NOT_FOUND = "file_not_found"
    ACCESS_DENIED = "access_denied"
    UNAVAILABLE = "unavailable"


class SbomStorageError(Exception):
    """Base exception for all service-specific errors."""

    http_status = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SbomStorageError):
    """Raised when configuration is invalid or missing."""
    pass


class StorageError(SbomStorageError):
    """Base storage failure.

    Raised as-is for failures that fit no narrower kind (missing bucket,
    uncategorized backend errors, unexpected exceptions). The original
    backend exception is kept in ``cause`` and chained as ``__cause__``.
    """

    kind = StorageErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, prefix: str, **details: Any) -> "StorageError":
        """Return a copy of this error, same kind, with a prefixed message.

        The copy wraps this error as its cause.
        """
        return type(self)(
            f"{prefix}: {self.message}",
            cause=self,
            status_code=self.status_code,
            details={**self.details, **details},
        )


class StorageKeyInvalidError(StorageError):
    """Raised when a storage key is empty or attempts path traversal."""

    kind = StorageErrorKind.KEY_INVALID
    http_status = 400


class StorageFileNotFoundError(StorageError):
    """Raised when no object exists at the requested key."""

    kind = StorageErrorKind.FILE_NOT_FOUND
    http_status = 404


class StorageAccessError(StorageError):
    """Raised when the backend denies access."""

    kind = StorageErrorKind.ACCESS_DENIED
    http_status = 403


class StorageUnavailableError(StorageError):
    """Raised when the backend is unreachable, unavailable or rate limiting."""

    kind = StorageErrorKind.UNAVAILABLE
    http_status = 503


__all__ = [
    "ConfigurationError",
    "SbomStorageError",
    "StorageAccessError",
    "StorageError",
    "StorageErrorKind",
    "StorageFileNotFoundError",
    "StorageKeyInvalidError",
    "StorageUnavailableError",
]

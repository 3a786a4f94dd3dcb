"""Translation of backend failures into storage errors.

Adapters classify whatever their client library raises into a
:class:`BackendFailure` once, then hand it to :func:`translate_failure`.
Nothing in here knows about a particular client library.
"""

from __future__ import annotations

from enum import Enum

from core.exceptions import (
    StorageAccessError,
    StorageError,
    StorageFileNotFoundError,
    StorageUnavailableError,
)


HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429
HTTP_SERVICE_UNAVAILABLE = 503


class BackendFailure(Enum):
    BUCKET_NOT_FOUND = "bucket_not_found"
    OBJECT_NOT_FOUND = "object_not_found"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    UNREACHABLE = "unreachable"
    OTHER = "other"
    UNEXPECTED = "unexpected"


class StorageOperation(Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"


def classify_status(status_code: int | None) -> BackendFailure:
    """Categorize a backend-reported error by its HTTP status code."""
    if status_code == HTTP_FORBIDDEN:
        return BackendFailure.FORBIDDEN
    if status_code == HTTP_TOO_MANY_REQUESTS:
        return BackendFailure.RATE_LIMITED
    if status_code == HTTP_SERVICE_UNAVAILABLE:
        return BackendFailure.UNAVAILABLE
    return BackendFailure.OTHER


def translate_failure(
    failure: BackendFailure,
    operation: StorageOperation,
    *,
    key: str,
    bucket: str,
    status_code: int | None = None,
    cause: BaseException | None = None,
) -> StorageError:
    """Build the storage error for a classified backend failure.

    A missing object is only reported as such on download; on upload it
    is an ordinary backend error for the key.
    """
    details = {"key": key, "bucket": bucket, "operation": operation.value}

    def _error(cls: type[StorageError], message: str) -> StorageError:
        return cls(message, cause=cause, status_code=status_code, details=details)

    if failure is BackendFailure.BUCKET_NOT_FOUND:
        return _error(StorageError, f"Storage bucket not found: {bucket}")
    if failure is BackendFailure.OBJECT_NOT_FOUND and operation is StorageOperation.DOWNLOAD:
        return _error(StorageFileNotFoundError, f"File not found: {key}")
    if failure is BackendFailure.FORBIDDEN:
        return _error(StorageAccessError, f"Access denied to storage bucket: {bucket}")
    if failure is BackendFailure.RATE_LIMITED:
        return _error(StorageUnavailableError, "Storage rate limit exceeded")
    if failure is BackendFailure.UNAVAILABLE:
        return _error(StorageUnavailableError, "Storage unavailable")
    if failure is BackendFailure.UNREACHABLE:
        return _error(StorageUnavailableError, f"Unable to connect to storage bucket: {bucket}")
    if failure is BackendFailure.UNEXPECTED:
        return _error(StorageError, f"Unexpected error for: {key}")
    return _error(StorageError, f"Storage error for: {key}")


__all__ = [
    "BackendFailure",
    "StorageOperation",
    "classify_status",
    "translate_failure",
]

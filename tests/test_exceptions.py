"""Tests for the storage error taxonomy."""

from core.exceptions import (
    ConfigurationError,
    SbomStorageError,
    StorageAccessError,
    StorageError,
    StorageErrorKind,
    StorageFileNotFoundError,
    StorageKeyInvalidError,
    StorageUnavailableError,
)


def test_storage_error_base():
    cause = RuntimeError("boom")
    error = StorageError("Storage error for: a/b.json", cause=cause, status_code=500, details={"key": "a/b.json"})
    assert str(error) == "Storage error for: a/b.json"
    assert error.message == "Storage error for: a/b.json"
    assert error.cause is cause
    assert error.__cause__ is cause
    assert error.status_code == 500
    assert error.details == {"key": "a/b.json"}
    assert error.kind is StorageErrorKind.GENERIC


def test_storage_error_without_cause():
    error = StorageError("plain")
    assert error.cause is None
    assert error.__cause__ is None
    assert error.status_code is None
    assert error.details == {}


def test_kinds_and_statuses():
    assert (StorageError.kind, StorageError.http_status) == (StorageErrorKind.GENERIC, 500)
    assert (StorageKeyInvalidError.kind, StorageKeyInvalidError.http_status) == (StorageErrorKind.KEY_INVALID, 400)
    assert (StorageFileNotFoundError.kind, StorageFileNotFoundError.http_status) == (StorageErrorKind.FILE_NOT_FOUND, 404)
    assert (StorageAccessError.kind, StorageAccessError.http_status) == (StorageErrorKind.ACCESS_DENIED, 403)
    assert (StorageUnavailableError.kind, StorageUnavailableError.http_status) == (StorageErrorKind.UNAVAILABLE, 503)


def test_with_context_keeps_kind():
    original = StorageUnavailableError("Storage unavailable", status_code=503, details={"key": "g/bom.json"})
    wrapped = original.with_context("Failed to upload file bom.json", filename="bom.json")

    assert type(wrapped) is StorageUnavailableError
    assert wrapped.message == "Failed to upload file bom.json: Storage unavailable"
    assert wrapped.cause is original
    assert wrapped.status_code == 503
    assert wrapped.details == {"key": "g/bom.json", "filename": "bom.json"}
    # the original is left untouched
    assert original.message == "Storage unavailable"
    assert original.details == {"key": "g/bom.json"}


def test_exception_inheritance():
    for cls in (StorageKeyInvalidError, StorageFileNotFoundError, StorageAccessError, StorageUnavailableError):
        assert issubclass(cls, StorageError)
    assert issubclass(StorageError, SbomStorageError)
    assert issubclass(ConfigurationError, SbomStorageError)
    assert not issubclass(ConfigurationError, StorageError)
    assert ConfigurationError("Config missing").http_status == 500

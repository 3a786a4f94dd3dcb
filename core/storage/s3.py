from __future__ import annotations

from typing import Any, BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, ConnectionError as BotoConnectionError, HTTPClientError
from loguru import logger

from core.exceptions import StorageError
from core.settings import StorageSettings
from core.storage.keys import validate_key
from core.storage.translation import (
    BackendFailure,
    StorageOperation,
    classify_status,
    translate_failure,
)

_BUCKET_MISSING_CODES = {"NoSuchBucket"}
_OBJECT_MISSING_CODES = {"NoSuchKey", "NotFound", "404"}


def classify_boto_error(exc: BaseException) -> tuple[BackendFailure, int | None]:
    """Map a boto3/botocore exception to a backend failure and HTTP status."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = str(error.get("Code", ""))
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if code in _BUCKET_MISSING_CODES:
            return BackendFailure.BUCKET_NOT_FOUND, status
        if code in _OBJECT_MISSING_CODES:
            return BackendFailure.OBJECT_NOT_FOUND, status
        return classify_status(status), status
    if isinstance(exc, (BotoConnectionError, HTTPClientError)):
        return BackendFailure.UNREACHABLE, None
    return BackendFailure.UNEXPECTED, None


class S3Storage:
    """S3-compatible storage adapter backed by a boto3 client."""

    def __init__(self, client: Any, bucket: str) -> None:
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "S3Storage":
        config = Config(
            retries={"mode": "standard", "total_max_attempts": settings.max_attempts},
            s3={"addressing_style": "path" if settings.path_style_access else "auto"},
        )
        session = boto3.session.Session(region_name=settings.region) if settings.region else boto3.session.Session()
        client = session.client("s3", endpoint_url=settings.endpoint_url, config=config)
        return cls(client, settings.bucket)

    def upload(self, key: str, content: BinaryIO, content_length: int, content_type: str) -> None:
        """Upload ``content`` to ``key``, replacing any existing object.

        The stream is read fully into memory first: botocore retries a
        failed put by resending the body, which only works when the body
        can be read again. Payloads are manifest-sized, so the memory cost
        stays small.

        Raises:
            StorageKeyInvalidError: If ``key`` is empty or contains ``..``.
            StorageAccessError: If the backend answers 403.
            StorageUnavailableError: If the backend is unreachable, rate
                limiting or unavailable.
            StorageError: For a missing bucket or any other failure.
        """
        validate_key(key)
        try:
            logger.info("Uploading to S3 bucket '{}': {}", self.bucket, key)
            data = content.read()
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentLength=content_length,
                ContentType=content_type,
            )
            logger.info("Uploaded to S3 bucket '{}': {} ({} bytes)", self.bucket, key, content_length)
        except Exception as exc:
            raise self._translate(exc, key, StorageOperation.UPLOAD) from exc

    def download(self, key: str) -> BinaryIO:
        """Open the object at ``key`` as a live stream.

        The returned ``StreamingBody`` is not buffered; the caller must
        close it.

        Raises:
            StorageKeyInvalidError: If ``key`` is empty or contains ``..``.
            StorageFileNotFoundError: If no object exists at ``key``.
            StorageAccessError: If the backend answers 403.
            StorageUnavailableError: If the backend is unreachable, rate
                limiting or unavailable.
            StorageError: For a missing bucket or any other failure.
        """
        validate_key(key)
        try:
            logger.info("Downloading from S3 bucket '{}': {}", self.bucket, key)
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            logger.info(
                "Downloaded from S3 bucket '{}': {} ({} bytes)",
                self.bucket,
                key,
                response.get("ContentLength"),
            )
            return response["Body"]
        except Exception as exc:
            raise self._translate(exc, key, StorageOperation.DOWNLOAD) from exc

    def _translate(self, exc: Exception, key: str, operation: StorageOperation) -> StorageError:
        failure, status = classify_boto_error(exc)
        logger.debug("S3 {} of {} failed as {}: {}", operation.value, key, failure.value, exc)
        return translate_failure(
            failure,
            operation,
            key=key,
            bucket=self.bucket,
            status_code=status,
            cause=exc,
        )


__all__ = ["S3Storage", "classify_boto_error"]

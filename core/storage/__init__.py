"""Object storage abstraction (S3/MinIO or local filesystem fallback)."""

from __future__ import annotations

from typing import BinaryIO, Protocol


class ObjectStorage(Protocol):
    """Upload/download contract every storage backend implements.

    Keys are validated by the implementation. ``upload`` overwrites any
    object already stored at ``key``. The stream returned by ``download``
    belongs to the caller, who must close it.
    """

    def upload(self, key: str, content: BinaryIO, content_length: int, content_type: str) -> None:
        ...

    def download(self, key: str) -> BinaryIO:
        ...


__all__ = ["ObjectStorage"]

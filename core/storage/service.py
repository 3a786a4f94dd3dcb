"""Storage orchestration: batch uploads and permanent URLs for SBOM files."""

from __future__ import annotations

from typing import BinaryIO, Protocol, Sequence

from loguru import logger

from core.exceptions import StorageError
from core.storage import ObjectStorage
from core.storage.keys import build_key, build_prefix
from core.storage.models import SbomFile

CONTENT_PATH = "/api/v1/storage/content"


class StorageAdministration(Protocol):
    def store_generation_sboms(self, generation_id: str, files: Sequence[SbomFile]) -> dict[str, str]:
        ...

    def store_enhancement_sboms(
        self, generation_id: str, enhancement_id: str, files: Sequence[SbomFile]
    ) -> dict[str, str]:
        ...

    def get_file_content(self, storage_key: str) -> BinaryIO:
        ...


class StorageService:
    """Stores SBOM files under their generation/enhancement prefix.

    Args:
        storage: Backend the files are written to.
        public_api_url: Base URL under which this service is reachable;
            permanent URLs are built from it.
    """

    def __init__(self, storage: ObjectStorage, public_api_url: str) -> None:
        self.storage = storage
        self.public_api_url = public_api_url

    def store_generation_sboms(self, generation_id: str, files: Sequence[SbomFile]) -> dict[str, str]:
        return self._upload_batch(build_prefix(generation_id), files)

    def store_enhancement_sboms(
        self, generation_id: str, enhancement_id: str, files: Sequence[SbomFile]
    ) -> dict[str, str]:
        return self._upload_batch(build_prefix(generation_id, enhancement_id), files)

    def get_file_content(self, storage_key: str) -> BinaryIO:
        return self.storage.download(storage_key)

    def permanent_url(self, storage_key: str) -> str:
        return f"{self.public_api_url}{CONTENT_PATH}/{storage_key}"

    def _upload_batch(self, prefix: str, files: Sequence[SbomFile]) -> dict[str, str]:
        """Upload ``files`` one by one under ``prefix``.

        The first failure aborts the batch and is re-raised with the
        filename attached. Files uploaded before it are not removed.
        """
        logger.info("Uploading {} files to folder: {}", len(files), prefix)

        urls: dict[str, str] = {}
        for file in files:
            key = build_key(prefix, file.filename)
            try:
                self.storage.upload(key, file.content, file.size, file.content_type)
            except StorageError as exc:
                logger.error("Upload failed for file {}. Aborting batch: {}", file.filename, exc.message)
                raise exc.with_context(f"Failed to upload file {file.filename}", filename=file.filename) from exc
            except Exception as exc:
                logger.exception("Upload failed for file {}. Aborting batch.", file.filename)
                raise StorageError(
                    f"Failed to upload file {file.filename}: {exc}",
                    cause=exc,
                    details={"key": key, "filename": file.filename},
                ) from exc
            urls[file.filename] = self.permanent_url(key)
        return urls


__all__ = ["CONTENT_PATH", "StorageAdministration", "StorageService"]

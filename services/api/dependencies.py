"""Wiring of configuration, storage backend and orchestration service."""

from __future__ import annotations

from functools import lru_cache

from loguru import logger

from core.settings import Settings, get_settings
from core.storage import ObjectStorage
from core.storage.local import LocalStorage
from core.storage.s3 import S3Storage
from core.storage.service import StorageAdministration, StorageService


def build_storage(settings: Settings) -> ObjectStorage:
    if settings.storage.backend == "local":
        logger.info("Using local storage at {}", settings.storage.local_root)
        return LocalStorage(settings.storage.local_root)
    logger.info(
        "Using S3 storage bucket={bucket} endpoint={endpoint}",
        bucket=settings.storage.bucket,
        endpoint=settings.storage.endpoint_url or "aws",
    )
    return S3Storage.from_settings(settings.storage)


@lru_cache(maxsize=1)
def get_storage_service() -> StorageAdministration:
    settings = get_settings()
    return StorageService(build_storage(settings), settings.api.public_url)


__all__ = ["build_storage", "get_storage_service"]

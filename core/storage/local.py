from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from loguru import logger

from core.exceptions import (
    StorageAccessError,
    StorageError,
    StorageFileNotFoundError,
    StorageKeyInvalidError,
)
from core.storage.keys import validate_key


class LocalStorage:
    """Filesystem storage for development; keys map to paths under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        validate_key(key)
        # absolute keys would otherwise replace root entirely
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise StorageKeyInvalidError("Path traversal not allowed", details={"key": key})
        return path

    def upload(self, key: str, content: BinaryIO, content_length: int, content_type: str) -> None:
        path = self._path_for(key)
        try:
            data = content.read()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except PermissionError as exc:
            raise StorageAccessError(
                f"Access denied to storage directory: {self.root}", cause=exc, details={"key": key}
            ) from exc
        except OSError as exc:
            raise StorageError(f"Storage error for: {key}", cause=exc, details={"key": key}) from exc
        logger.info("Stored {} in {} ({} bytes)", key, self.root, len(data))

    def download(self, key: str) -> BinaryIO:
        path = self._path_for(key)
        try:
            return path.open("rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise StorageFileNotFoundError(f"File not found: {key}", cause=exc, details={"key": key}) from exc
        except PermissionError as exc:
            raise StorageAccessError(
                f"Access denied to storage directory: {self.root}", cause=exc, details={"key": key}
            ) from exc
        except OSError as exc:
            raise StorageError(f"Storage error for: {key}", cause=exc, details={"key": key}) from exc


__all__ = ["LocalStorage"]

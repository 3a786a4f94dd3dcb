"""Storage key helpers."""

from __future__ import annotations

from core.exceptions import StorageKeyInvalidError


def validate_key(key: str | None) -> str:
    """Reject empty keys and keys containing ``..``.

    Returns:
        The key, unchanged.

    Raises:
        StorageKeyInvalidError: If the key is empty, whitespace-only or
            attempts path traversal.
    """
    if key is None or not key.strip():
        raise StorageKeyInvalidError("Key cannot be empty", details={"key": key})
    if ".." in key:
        raise StorageKeyInvalidError("Path traversal not allowed", details={"key": key})
    return key


def build_prefix(*context_ids: str) -> str:
    # generation id, optionally followed by an enhancement id
    return "/".join(context_ids)


def build_key(prefix: str, filename: str) -> str:
    return f"{prefix}/{filename}"


__all__ = ["build_key", "build_prefix", "validate_key"]

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class SbomFile:
    """A file handed over for storage.

    ``content`` is consumed once by the storage backend and is not
    closed by it; whoever opened the stream closes it.
    """

    filename: str
    content_type: str
    size: int
    content: BinaryIO

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")


__all__ = ["SbomFile"]

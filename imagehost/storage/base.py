"""Abstract storage backend."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import BinaryIO


class InvalidPathError(ValueError):
    """Raised when path segments would escape the backend root."""


def validate_segments(path_segments: Sequence[str]) -> list[str]:
    """
    Check that every segment names a single entry directly below its parent.
    Returns the segments as a list; raises InvalidPathError otherwise.
    """
    if isinstance(path_segments, str):
        raise InvalidPathError("path segments must be a sequence, not a string")
    segments = list(path_segments)
    if not segments:
        raise InvalidPathError("at least one path segment is required")
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise InvalidPathError(f"invalid path segment: {segment!r}")
        if segment in (".", "..") or any(c in segment for c in ("/", "\\", "\x00")):
            raise InvalidPathError(f"invalid path segment: {segment!r}")
    return segments


class StorageBackend(ABC):
    """Interface for image storage (local disk or S3)."""

    # Whether GET /static/... can read files from base_path()
    serves_static: bool = False

    @abstractmethod
    async def upload(
        self,
        content: BinaryIO | bytes,
        path_segments: Sequence[str],
        content_type: str | None = None,
    ) -> str:
        """
        Store content under base_path() joined with path_segments and return
        a URL that resolves to the stored bytes.
        """
        ...

    @abstractmethod
    def base_path(self) -> str:
        """Root used to resolve static request paths."""
        ...

    def key_for(self, path_segments: Sequence[str]) -> str:
        """Build the relative storage key: segments joined with '/'."""
        return "/".join(validate_segments(path_segments))

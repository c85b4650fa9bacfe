"""Local filesystem storage."""

import logging
import uuid
from collections.abc import Sequence
from contextlib import suppress
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote

import aiofiles
import aiofiles.os

from imagehost.storage.base import InvalidPathError, StorageBackend, validate_segments

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class LocalStorage(StorageBackend):
    """Store images on local disk. URLs look like <endpoint>/<segments...>."""

    serves_static = True

    def __init__(self, base_dir: str | Path, endpoint: str) -> None:
        self.root = Path(base_dir).resolve()
        self.endpoint = endpoint.rstrip("/")

    def base_path(self) -> str:
        return str(self.root)

    def path_for(self, path_segments: Sequence[str]) -> Path:
        """Resolve segments under the root. Raises InvalidPathError on escape."""
        segments = validate_segments(path_segments)
        resolved = self.root.joinpath(*segments).resolve()
        if resolved == self.root or not resolved.is_relative_to(self.root):
            raise InvalidPathError("Invalid storage path")
        return resolved

    def url_for(self, path_segments: Sequence[str]) -> str:
        segments = validate_segments(path_segments)
        return "/".join([self.endpoint, *(quote(s) for s in segments)])

    async def upload(
        self,
        content: BinaryIO | bytes,
        path_segments: Sequence[str],
        content_type: str | None = None,
    ) -> str:
        path = self.path_for(path_segments)
        logger.info("Writing %s", path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write next to the target and rename, so readers never see a partial file
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.part")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                if isinstance(content, (bytes, bytearray)):
                    await f.write(content)
                else:
                    while chunk := content.read(CHUNK_SIZE):
                        await f.write(chunk)
            await aiofiles.os.replace(tmp_path, path)
        except BaseException:
            with suppress(FileNotFoundError):
                await aiofiles.os.remove(tmp_path)
            raise
        return self.url_for(path_segments)

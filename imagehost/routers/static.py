"""Serve stored images from the local storage root."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse

from imagehost.deps import get_storage
from imagehost.storage import InvalidPathError, StorageBackend, validate_segments

logger = logging.getLogger(__name__)

STATIC_PREFIX = "/static"

router = APIRouter(prefix=STATIC_PREFIX, tags=["static"])


def resolve_static_path(root: str | Path, path: str) -> Path | None:
    """
    Map a request path (prefix already stripped) to a file under root.
    Empty segments are ignored; returns None when nothing is left.
    """
    root = Path(root).resolve()
    segments = [s for s in path.split("/") if s]
    if not segments:
        return None
    validate_segments(segments)
    full_path = root.joinpath(*segments).resolve()
    if not full_path.is_relative_to(root):
        raise InvalidPathError("Path escapes storage root")
    return full_path


@router.get("/{path:path}")
async def show_file(
    path: str,
    storage: Annotated[StorageBackend, Depends(get_storage)],
):
    """Serve a file from the storage root. Path must stay under the root."""
    try:
        full_path = resolve_static_path(storage.base_path(), path)
    except InvalidPathError:
        logger.warning("Rejected static path %r", path)
        return PlainTextResponse("Forbidden", status_code=403)
    logger.info("path=%s", full_path)
    if full_path is None or not full_path.is_file():
        return PlainTextResponse("Not Found", status_code=404)
    return FileResponse(full_path)

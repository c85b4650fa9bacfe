"""Upload API: decode a data URL and hand the bytes to the storage backend."""

import io
import logging
import uuid
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from imagehost.core.data_url import DataURLError, decode_data_url
from imagehost.deps import get_storage
from imagehost.schemas.upload import FileUploadRequest, FileUploadResponse
from imagehost.storage import StorageBackend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


def _failure() -> Response:
    # The wire contract has no error body: every failure is a bare 500
    return Response(status_code=500)


@router.post(
    "/upload",
    response_model=FileUploadResponse,
    responses={500: {"description": "Decode, storage or encode failure (empty body)"}},
)
async def upload_file(
    request: Request,
    storage: Annotated[StorageBackend, Depends(get_storage)],
) -> Response:
    """
    Store an image sent as {"content": "<data-url>"}.
    The file is named <uuid>.<media subtype>, e.g. 0b4e...c1.jpeg.
    """
    try:
        body = FileUploadRequest.model_validate_json(await request.body())
    except ValidationError as e:
        logger.warning("Invalid upload request: %s", e)
        return _failure()
    try:
        data_url = decode_data_url(body.content)
    except DataURLError as e:
        logger.warning("Invalid data URL: %s", e)
        return _failure()

    file_id = str(uuid.uuid4())
    filename = f"{file_id}.{data_url.subtype}"
    logger.info("%s: %s: %s", data_url.content_type, data_url.type, data_url.subtype)
    try:
        url = await storage.upload(
            io.BytesIO(data_url.data),
            [filename],
            content_type=data_url.content_type,
        )
    except Exception:
        logger.exception("Upload of %s failed", filename)
        return _failure()
    logger.info("url: %s", url)

    res = FileUploadResponse(id=file_id, url=url, uploadedAt=datetime.now(timezone.utc))
    try:
        payload = res.model_dump_json()
    except ValueError:
        # The object is already stored at this point
        logger.exception("Encoding response for stored %s failed", filename)
        return _failure()
    return Response(content=payload, media_type="application/json")

"""AWS S3 storage backend."""

import io
import logging
from collections.abc import Sequence
from typing import Any, BinaryIO
from urllib.parse import quote

import boto3
from botocore.config import Config
from fastapi.concurrency import run_in_threadpool

from imagehost.storage.base import StorageBackend

logger = logging.getLogger(__name__)

URL_STRATEGIES = ("presigned", "public")
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def create_s3_client(region: str) -> Any:
    """Create an S3 client. Credentials come from the usual AWS chain."""
    return boto3.client(
        "s3",
        region_name=region,
        config=Config(signature_version="s3v4", s3={"addressing_style": "virtual"}),
    )


class S3Storage(StorageBackend):
    """
    Store images in an S3 bucket under a fixed key prefix.

    url_strategy="presigned" returns a GET URL signed for presign_expires
    seconds, so the bucket can stay private. url_strategy="public" returns the
    virtual-hosted object location and only works for public buckets.
    """

    def __init__(
        self,
        bucket: str,
        key_prefix: str = "dev/image",
        region: str = "ap-northeast-1",
        url_strategy: str = "presigned",
        presign_expires: int = 300,
        client: Any = None,
    ) -> None:
        if not bucket:
            raise RuntimeError("bucket is empty. export AWS_S3_BUCKET=<your_bucket>.")
        if url_strategy not in URL_STRATEGIES:
            raise RuntimeError(
                f"Unknown S3 URL strategy {url_strategy!r}, expected one of {URL_STRATEGIES}"
            )
        self.bucket = bucket
        self.key_prefix = key_prefix.strip("/")
        self.region = region
        self.url_strategy = url_strategy
        self.presign_expires = presign_expires
        self.client = client if client is not None else create_s3_client(region)

    def base_path(self) -> str:
        # Not a filesystem path: S3 objects are fetched through the returned URL
        return f"s3://{self.bucket}/{self.key_prefix}"

    def object_key(self, path_segments: Sequence[str]) -> str:
        key = self.key_for(path_segments)
        return f"{self.key_prefix}/{key}" if self.key_prefix else key

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"

    def presigned_url(self, key: str) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.presign_expires,
        )

    async def upload(
        self,
        content: BinaryIO | bytes,
        path_segments: Sequence[str],
        content_type: str | None = None,
    ) -> str:
        key = self.object_key(path_segments)
        if isinstance(content, (bytes, bytearray)):
            content = io.BytesIO(content)
        await run_in_threadpool(
            self.client.upload_fileobj,
            content,
            self.bucket,
            key,
            ExtraArgs={"ContentType": content_type or DEFAULT_CONTENT_TYPE},
        )
        logger.info("Uploaded s3://%s/%s", self.bucket, key)
        if self.url_strategy == "public":
            return self.public_url(key)
        return await run_in_threadpool(self.presigned_url, key)

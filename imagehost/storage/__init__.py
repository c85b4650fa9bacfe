# Storage backends

from imagehost import config
from imagehost.storage.base import InvalidPathError, StorageBackend, validate_segments

BACKENDS = ("local", "s3")


def build_storage(backend: str | None = None, bucket: str | None = None) -> StorageBackend:
    """Create the configured backend. Raises RuntimeError on bad configuration."""
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "s3":
        from imagehost.storage.s3_storage import S3Storage

        return S3Storage(
            bucket=bucket if bucket is not None else config.AWS_S3_BUCKET,
            key_prefix=config.S3_KEY_PREFIX,
            region=config.AWS_REGION,
            url_strategy=config.S3_URL_STRATEGY,
            presign_expires=config.S3_PRESIGN_EXPIRES,
        )
    if backend == "local":
        from imagehost.storage.local_storage import LocalStorage

        return LocalStorage(config.LOCAL_STORAGE_PATH, config.STATIC_BASE_URL)
    raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r}, expected one of {BACKENDS}")


__all__ = ["build_storage", "InvalidPathError", "StorageBackend", "validate_segments"]

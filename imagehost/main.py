import logging

from fastapi import FastAPI

from imagehost import config
from imagehost.routers import static, uploads
from imagehost.storage import StorageBackend, build_storage

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def create_app(storage: StorageBackend | None = None) -> FastAPI:
    """Build the API around a storage backend (configured one by default)."""
    if storage is None:
        storage = build_storage()

    app = FastAPI(
        title="imagehost",
        description="Store data-URL images on local disk or S3",
        version=config.VERSION,
    )
    app.state.storage = storage
    logger.info("storage backend=%s base_path=%s", type(storage).__name__, storage.base_path())

    app.include_router(uploads.router)

    # Static files only exist for the local backend; S3 URLs point at the bucket
    if storage.serves_static:
        app.include_router(static.router)

    @app.get("/")
    async def root():
        return {
            "message": "imagehost",
            "version": config.VERSION,
            "backend": "local" if storage.serves_static else "s3",
        }

    return app

"""Application configuration."""

import os
from pathlib import Path

# Load .env so AWS_S3_BUCKET and other vars are available
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

# Storage: "local" or "s3"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")

# Local storage root (used when STORAGE_BACKEND=local)
LOCAL_STORAGE_PATH = Path(os.getenv("LOCAL_STORAGE_PATH", "image")).resolve()

# Base URL for local files (e.g. http://localhost:8080/static)
STATIC_BASE_URL = os.getenv("STATIC_BASE_URL", "http://localhost:8080/static").rstrip("/")

# S3 (used when STORAGE_BACKEND=s3)
AWS_S3_BUCKET = os.getenv("AWS_S3_BUCKET", "")
AWS_REGION = os.getenv("AWS_REGION", "ap-northeast-1")
S3_KEY_PREFIX = os.getenv("S3_KEY_PREFIX", "dev/image").strip("/")
# "presigned" hands out short-lived signed GET URLs; "public" needs a public bucket
S3_URL_STRATEGY = os.getenv("S3_URL_STRATEGY", "presigned").lower()
S3_PRESIGN_EXPIRES = int(os.getenv("S3_PRESIGN_EXPIRES", "300"))  # 5 minutes

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

VERSION = "0.1.0"

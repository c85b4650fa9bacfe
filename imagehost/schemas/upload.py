"""Pydantic schemas for Upload API."""

from datetime import datetime

from pydantic import BaseModel, Field


class FileUploadRequest(BaseModel):
    """Upload payload: the image as a data URL."""

    content: str = Field(..., description="data:<mediatype>;base64,<data>")


class FileUploadResponse(BaseModel):
    """Stored image as returned by the API."""

    id: str
    url: str
    uploadedAt: datetime

import base64

import pytest
from fastapi.testclient import TestClient

from imagehost.main import create_app
from imagehost.storage.local_storage import LocalStorage

# Smallest JPEG-looking payload; the service never inspects image bytes
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01" + bytes(range(256)) + b"\xff\xd9"


def make_data_url(data: bytes, media_type: str = "image/jpeg") -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


@pytest.fixture
def jpeg_data_url() -> str:
    return make_data_url(JPEG_BYTES)


@pytest.fixture
def local_storage(tmp_path):
    return LocalStorage(tmp_path / "image", "http://testserver/static")


@pytest.fixture
def client(local_storage):
    with TestClient(create_app(local_storage)) as c:
        yield c

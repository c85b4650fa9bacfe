from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from imagehost.main import create_app
from imagehost.routers.static import resolve_static_path
from imagehost.storage import InvalidPathError
from imagehost.storage.s3_storage import S3Storage


@pytest.fixture
def stored(local_storage):
    root = local_storage.path_for(["x"]).parent
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "pic.png").write_bytes(b"\x89PNG")
    # Names starting with letters of "static/" must not lose characters
    (root / "tacos.gif").write_bytes(b"GIF89a")
    return root


def test_serves_nested_file(client, stored):
    resp = client.get("/static/sub/pic.png")
    assert resp.status_code == 200
    assert resp.content == b"\x89PNG"
    assert resp.headers["content-type"] == "image/png"


def test_prefix_is_stripped_exactly_once(client, stored):
    resp = client.get("/static/tacos.gif")
    assert resp.status_code == 200
    assert resp.content == b"GIF89a"


def test_missing_file_is_404(client, stored):
    assert client.get("/static/nope.png").status_code == 404


def test_directory_is_404(client, stored):
    assert client.get("/static/sub").status_code == 404


def test_trailing_slash_and_bare_prefix_are_404(client, stored):
    assert client.get("/static/").status_code == 404
    assert client.get("/static/sub/").status_code == 404


def test_resolve_static_path_stays_under_root(tmp_path):
    assert resolve_static_path(tmp_path, "a/b.png") == tmp_path.resolve() / "a" / "b.png"
    assert resolve_static_path(tmp_path, "a//b.png/") == tmp_path.resolve() / "a" / "b.png"
    assert resolve_static_path(tmp_path, "") is None
    for path in ("../secret", "a/../../secret", "a/./b", "a\\..\\b", "nul\x00.png"):
        with pytest.raises(InvalidPathError):
            resolve_static_path(tmp_path, path)


def test_symlink_out_of_root_is_rejected(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("secret")
    (root / "link.txt").symlink_to(tmp_path / "secret.txt")

    with pytest.raises(InvalidPathError):
        resolve_static_path(root, "link.txt")


def test_static_route_absent_for_s3_backend():
    app = create_app(S3Storage("bkt", client=MagicMock()))
    with TestClient(app) as c:
        assert c.get("/static/anything.png").status_code == 404
        assert c.get("/").json()["backend"] == "s3"


def test_root_reports_local_backend(client):
    body = client.get("/").json()
    assert body["backend"] == "local"
    assert body["message"] == "imagehost"

import pytest

from imagehost.core.data_url import DataURLError, decode_data_url


def test_base64_image():
    d = decode_data_url("data:image/jpeg;base64,/9j/4AAQ")
    assert d.type == "image"
    assert d.subtype == "jpeg"
    assert d.media_type == "image/jpeg"
    assert d.data == b"\xff\xd8\xff\xe0\x00\x10"
    assert d.content_type == "image/jpeg"


def test_media_type_is_lowercased_and_params_kept():
    d = decode_data_url("data:Image/PNG;name=a%20b.png;base64,iVBORw==")
    assert d.subtype == "png"
    assert d.params == {"name": "a b.png"}
    assert d.content_type == 'image/png; name="a b.png"'
    assert d.data == b"\x89PNG"


def test_content_type_is_a_valid_header_value():
    d = decode_data_url("data:image/png;charset=utf-8;title=%22caf%C3%A9%22;base64,iVBORw==")
    assert d.params["title"] == '"caf\u00e9"'
    assert d.content_type == 'image/png; charset=utf-8; title="%22caf%C3%A9%22"'
    d.content_type.encode("ascii")


def test_default_media_type_for_plain_text():
    d = decode_data_url("data:,Hello%2C%20World!")
    assert d.media_type == "text/plain"
    assert d.params == {"charset": "US-ASCII"}
    assert d.data == b"Hello, World!"


def test_compound_subtype():
    d = decode_data_url("data:image/svg+xml;base64,PHN2Zy8+")
    assert d.subtype == "svg+xml"
    assert d.data == b"<svg/>"


def test_whitespace_in_base64_is_ignored():
    d = decode_data_url("data:image/gif;base64,R0lG\nODlh")
    assert d.data == b"GIF89a"


@pytest.mark.parametrize(
    "value",
    [
        "hello world",
        "http://example.com/a.jpeg",
        "data:image/jpeg;base64",
        "data:image;base64,AAAA",
        "data:image/jp/eg;base64,AAAA",
        "data:image/jpeg;base64,not base64!",
        "data:image/jpeg;base64,AAA",
        "data:image/jpeg;charset;base64,AAAA",
    ],
)
def test_malformed(value):
    with pytest.raises(DataURLError):
        decode_data_url(value)


def test_data_url_error_is_value_error():
    with pytest.raises(ValueError):
        decode_data_url("")

"""Decode RFC 2397 data URLs (data:[<mediatype>][;base64],<data>)."""

import base64
import binascii
import re
from dataclasses import dataclass, field
from urllib.parse import quote, unquote, unquote_to_bytes

DEFAULT_MEDIA_TYPE = "text/plain"
DEFAULT_PARAMS = {"charset": "US-ASCII"}

# RFC 7230 token characters
_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_MEDIA_TYPE_RE = re.compile(rf"^({_TOKEN})/({_TOKEN})$")
_PARAM_RE = re.compile(rf"^({_TOKEN})=(.*)$")
_TOKEN_RE = re.compile(rf"^{_TOKEN}$")
# Printable ASCII kept as-is inside a quoted-string; anything else is percent-encoded
_QUOTED_SAFE = "".join(chr(c) for c in range(0x20, 0x7f) if chr(c) not in "\"\\%")


class DataURLError(ValueError):
    """Raised when a string is not a well-formed data URL."""


def _param_value(value: str) -> str:
    if _TOKEN_RE.match(value):
        return value
    return '"' + quote(value, safe=_QUOTED_SAFE) + '"'


@dataclass(frozen=True)
class DataURL:
    type: str
    subtype: str
    data: bytes
    params: dict[str, str] = field(default_factory=dict)

    @property
    def media_type(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def content_type(self) -> str:
        """
        Media type with parameters, usable as a header value, e.g.
        'text/plain; charset=US-ASCII' or 'image/png; name="a b.png"'.
        """
        parts = [self.media_type, *(f"{k}={_param_value(v)}" for k, v in self.params.items())]
        return "; ".join(parts)


def decode_data_url(value: str) -> DataURL:
    """Parse a data URL string. Raises DataURLError if it is malformed."""
    if not isinstance(value, str):
        raise DataURLError("data URL must be a string")
    value = value.strip()
    if value[:5].lower() != "data:":
        raise DataURLError("missing 'data:' scheme")
    header, sep, payload = value[5:].partition(",")
    if not sep:
        raise DataURLError("missing ',' separator")

    parts = [p.strip() for p in header.split(";")]
    is_base64 = len(parts) > 1 and parts[-1].lower() == "base64"
    if is_base64:
        parts = parts[:-1]

    media_type, params = parts[0], parts[1:]
    if media_type:
        match = _MEDIA_TYPE_RE.match(media_type)
        if not match:
            raise DataURLError(f"invalid media type: {media_type!r}")
        type_, subtype = match.group(1).lower(), match.group(2).lower()
        parsed_params: dict[str, str] = {}
    else:
        type_, subtype = DEFAULT_MEDIA_TYPE.split("/")
        parsed_params = dict(DEFAULT_PARAMS)
    for param in params:
        match = _PARAM_RE.match(param)
        if not match:
            raise DataURLError(f"invalid media type parameter: {param!r}")
        parsed_params[match.group(1).lower()] = unquote(match.group(2))

    if is_base64:
        encoded = "".join(unquote(payload).split())
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DataURLError(f"invalid base64 payload: {e}") from e
    else:
        data = unquote_to_bytes(payload)
    return DataURL(type=type_, subtype=subtype, data=data, params=parsed_params)

"""
Entity body types and conversions shared by messages and connectors.

Entity kinds:

* ``json`` - any JSON serializable value
* ``text`` - a str
* ``data-url`` - a ``data:`` URI str
* ``base64`` - base64 encoded str
* ``blob`` - a Blob (bytes plus mime type)
* ``buffer`` - bytes
* ``arraybuffer`` - bytearray or memoryview
* ``form`` - a FormData
* ``stream`` - a binary file-like object
"""

import base64
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote_to_bytes

JSON = "json"
TEXT = "text"
DATA_URL = "data-url"
BASE64 = "base64"
BLOB = "blob"
BUFFER = "buffer"
ARRAYBUFFER = "arraybuffer"
FORM = "form"
STREAM = "stream"

BINARY_TYPES = frozenset({BLOB, BUFFER, STREAM, ARRAYBUFFER, DATA_URL, BASE64})

DEFAULT_MIME_TYPE = "application/octet-stream"

DATA_URL_PATTERN = re.compile(r"^data:(.+?)(;base64)?,(.*)$", re.DOTALL)


@dataclass
class Blob:
    """Binary content together with its mime type."""

    data: bytes
    type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class FormData:
    """Multipart form fields and files."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, Any] = field(default_factory=dict)

    def append(self, name: str, value: Any) -> "FormData":
        if isinstance(value, (bytes, Blob)) or hasattr(value, "read"):
            self.files[name] = value
        else:
            self.fields[name] = value
        return self


@dataclass(frozen=True)
class ProgressEvent:
    """Upload progress reported to a message progress callback."""

    loaded: int
    total: int

    @property
    def length_computable(self) -> bool:
        return self.total > 0


def is_data_url(value: str) -> bool:
    return DATA_URL_PATTERN.match(value) is not None


def parse_data_url(value: str) -> Tuple[str, bytes]:
    """Split a data URL into its mime type and decoded payload.

    Raises:
        ValueError: If the value is not a data URL.
    """
    match = DATA_URL_PATTERN.match(value)
    if match is None:
        raise ValueError("Invalid data url")

    mime_type, is_base64, payload = match.groups()
    if is_base64:
        return mime_type, base64.b64decode(payload)

    return mime_type, unquote_to_bytes(payload)


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def to_data_url(data: bytes, mime_type: Optional[str] = None) -> str:
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{to_base64(data)}"

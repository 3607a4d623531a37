"""
Messages describe one request against the Orestes REST API.

Message classes are created from a declarative specification::

    GetObject = Message.create(method="GET", path="/db/:bucket/:oid?depth", status=[200])
    message = GetObject("Person", "123", 2)
    message.get_path()  # '/db/Person/123?depth=2'

An instance is sent once through a Connector, which calls ``do_receive``
to validate the response status.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import quote

from orestes.config import get_config
from orestes.errors import CommunicationError
from orestes.formats import (
    ARRAYBUFFER,
    BINARY_TYPES,
    BLOB,
    BUFFER,
    DATA_URL,
    FORM,
    JSON,
    TEXT,
    Blob,
    FormData,
    is_data_url,
)
from orestes.message.specification import (
    MessageSpecification,
    compile_specification,
    external_specification,
)

# Characters left unescaped by encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"

NO_CACHE = "max-age=0, no-cache"

ProgressCallback = Callable[[Any], Any]


def encode_component(value: Any) -> str:
    """Percent-encode one path or query component."""
    if value is None:
        return ""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def format_etag(etag: Optional[str]) -> Optional[str]:
    """Quote an entity tag unless it is empty, ``*`` or already quoted."""
    if etag and etag != "*":
        etag = str(etag)
        if '"' not in etag:
            etag = f'"{etag}"'
    return etag


def _json_default(obj: Any) -> Any:
    if hasattr(obj, "to_json"):
        return obj.to_json()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dump_json(value: Any) -> str:
    """Serialize a value to JSON, using ``to_json()`` where an object provides one."""
    return json.dumps(value, default=_json_default)


@dataclass
class Request:
    """The request record a connector turns into an HTTP exchange."""

    method: str
    path: str
    headers: Dict[str, Any] = field(default_factory=dict)
    entity: Any = None
    type: Optional[str] = None


class Message:
    """One logical call against the remote service."""

    spec: ClassVar[MessageSpecification]

    def __init__(self, *args: Any):
        self.with_credentials = False
        self.token_storage = None
        self.progress_callback: Optional[ProgressCallback] = None
        self.sent = False

        spec = self.spec
        index = 0
        path = spec.path[0]
        length = len(spec.path)
        for i in range(1, length):
            arg = args[index] if index < len(args) else None
            if spec.dynamic and i == length - 1:
                rest = "" if arg is None else str(arg)
                path += "/".join(encode_component(part) for part in rest.split("/"))
                path += spec.path[i]
            else:
                path += encode_component(arg) + spec.path[i]
            index += 1

        query = ""
        for name in spec.query:
            arg = args[index] if index < len(args) else None
            index += 1
            if arg is not None:
                query += "&" if (query or "?" in path) else "?"
                query += f"{name}={encode_component(arg)}"

        self.request = Request(method=spec.method, path=path + query)
        self._response_type: Optional[str] = None

        if index < len(args) and args[index] is not None:
            self.set_entity(args[index], JSON)

        self.set_response_type(JSON)

    @classmethod
    def create(
        cls,
        method: str,
        path: str,
        status: Iterable[int],
        name: Optional[str] = None,
    ) -> type:
        """Create a message class for a path relative to the API base path.

        Args:
            method: The HTTP method.
            path: The path template, e.g. ``/db/:bucket/:oid?depth``.
            status: The accepted response status codes.
            name: Optional class name for the created message class.

        Returns:
            A new Message subclass.
        """
        spec = compile_specification(method, path, status)
        return type(name or "Message", (cls,), {"spec": spec})

    @classmethod
    def create_external(
        cls,
        method: str,
        path: str,
        query: Iterable[str],
        status: Iterable[int],
        members: Optional[Mapping[str, Any]] = None,
        name: Optional[str] = None,
    ) -> type:
        """Create a message class for an absolute third-party URL.

        Args:
            method: The HTTP method.
            path: The absolute URL, sent as-is.
            query: Query parameter names bound to the constructor arguments.
            status: The accepted response status codes.
            members: Additional attributes of the created class.
            name: Optional class name for the created message class.

        Returns:
            A new Message subclass.
        """
        spec = external_specification(method, path, query, status)
        namespace = dict(members or {})
        namespace["spec"] = spec
        return type(name or "ExternalMessage", (cls,), namespace)

    @property
    def is_binary(self) -> bool:
        return self.request.type in BINARY_TYPES or self._response_type in BINARY_TYPES

    def get_path(self) -> str:
        return self.request.path

    def set_path(self, path: Optional[str]) -> "Message":
        """Replace the path, keeping the current query parameters."""
        if path is None:
            return self

        current = self.request.path
        query_index = current.find("?") + 1
        if query_index > 0:
            separator = "&" if "?" in path else "?"
            path = path + separator + current[query_index:]
        self.request.path = path
        return self

    def get_header(self, name: str) -> Any:
        return self.request.headers.get(name)

    def set_header(self, name: str, value: Any) -> "Message":
        if value is not None:
            self.request.headers[name] = value
        return self

    def get_entity(self) -> Any:
        return self.request.entity

    def set_entity(self, data: Any, type: Optional[str] = None) -> "Message":
        """Set the request body.

        Args:
            data: The body to send.
            type: The entity kind; inferred from the value when omitted.
        """
        request_type = type
        if not request_type:
            if isinstance(data, str):
                request_type = DATA_URL if is_data_url(data) else TEXT
            elif isinstance(data, Blob):
                request_type = BLOB
            elif isinstance(data, bytes):
                request_type = BUFFER
            elif isinstance(data, (bytearray, memoryview)):
                request_type = ARRAYBUFFER
            elif isinstance(data, FormData):
                request_type = FORM
            else:
                request_type = JSON

        self.request.type = request_type
        self.request.entity = data
        return self

    def get_mime_type(self) -> Optional[str]:
        return self.get_header("content-type")

    def set_mime_type(self, mime_type: Optional[str]) -> "Message":
        return self.set_header("content-type", mime_type)

    def get_content_length(self) -> Optional[int]:
        return self.get_header("content-length")

    def set_content_length(self, content_length: Optional[int]) -> "Message":
        return self.set_header("content-length", content_length)

    def get_if_match(self) -> Optional[str]:
        return self.get_header("If-Match")

    def set_if_match(self, etag: Optional[str]) -> "Message":
        return self.set_header("If-Match", format_etag(etag))

    def get_if_none_match(self) -> Optional[str]:
        return self.get_header("If-None-Match")

    def set_if_none_match(self, etag: Optional[str]) -> "Message":
        return self.set_header("If-None-Match", format_etag(etag))

    def get_if_unmodified_since(self) -> Optional[str]:
        return self.get_header("if-unmodified-since")

    def set_if_unmodified_since(self, date: Optional[datetime]) -> "Message":
        """Set the date based precondition as an RFC 1123 GMT string.

        Naive datetimes are taken as UTC.
        """
        if date is None:
            return self
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return self.set_header(
            "if-unmodified-since", format_datetime(date.astimezone(timezone.utc), usegmt=True)
        )

    def get_cache_control(self) -> Optional[str]:
        return self.get_header("cache-control")

    def set_cache_control(self, value: Optional[str]) -> "Message":
        return self.set_header("cache-control", value)

    def no_cache(self) -> "Message":
        """Bypass any local cache for this request.

        Where the environment does not honour ``cache-control`` revalidation,
        contradicting preconditions are sent as well so that a cached
        response can never match.
        """
        if not get_config("revalidation_supported"):
            self.force_revalidation()
        return self.set_cache_control(NO_CACHE)

    def force_revalidation(self) -> "Message":
        return self.set_if_match('""').set_if_none_match("-")

    def get_acl(self) -> Optional[str]:
        return self.get_header("baqend-acl")

    def set_acl(self, acl: Any) -> "Message":
        if acl is None:
            return self
        return self.set_header("baqend-acl", dump_json(acl))

    def get_custom_headers(self) -> Optional[str]:
        return self.get_header("baqend-custom-headers")

    def set_custom_headers(self, custom_headers: Any) -> "Message":
        if custom_headers is None:
            return self
        return self.set_header("baqend-custom-headers", dump_json(custom_headers))

    def get_accept(self) -> Optional[str]:
        return self.get_header("accept")

    def set_accept(self, accept: Optional[str]) -> "Message":
        return self.set_header("accept", accept)

    def get_response_type(self) -> Optional[str]:
        return self._response_type

    def set_response_type(self, type: Optional[str]) -> "Message":
        if type is not None:
            self._response_type = type
        return self

    def get_progress(self) -> Optional[ProgressCallback]:
        return self.progress_callback

    def set_progress(self, callback: Optional[ProgressCallback]) -> "Message":
        if callback is not None:
            self.progress_callback = callback
        return self

    def add_query_string(self, query: Union[str, Mapping[str, Any], None]) -> "Message":
        """Append to the request path.

        A str is appended verbatim, a mapping is serialized as a query string.
        """
        if isinstance(query, str):
            self.request.path += query
            return self

        if query:
            separator = "&" if "?" in self.request.path else "?"
            for key, value in query.items():
                self.request.path += f"{separator}{key}={encode_component(value)}"
                separator = "&"

        return self

    def do_receive(self, response) -> None:
        """Validate the received response.

        Raises:
            CommunicationError: If the status is not accepted by this message.
        """
        if response.status not in self.spec.status:
            raise CommunicationError(self, response)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.request.method} {self.request.path})"

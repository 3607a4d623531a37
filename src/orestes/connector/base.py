"""
The connector request/response pipeline.

A Connector is bound to one origin (host, port, scheme and base path). It
prepares a message for the wire, hands it to the transport specific
``do_send`` primitive, normalizes what comes back and lets the message
validate the status. Subclasses provide the transport: ``do_send``,
``to_format`` and ``from_format``.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from orestes.errors import PersistentError
from orestes.formats import JSON, TEXT
from orestes.message.connect import CONNECT_PATH
from orestes.message.message import NO_CACHE, Message, Request
from orestes.telemetry import get_telemetry

# Headers a connector reads from responses.
RESPONSE_HEADERS = (
    "baqend-authorization-token",
    "content-type",
    "baqend-size",
    "baqend-acl",
    "etag",
    "last-modified",
    "baqend-created-at",
    "baqend-custom-headers",
)

TOKEN_HEADER = "baqend-authorization-token"

# Legacy IE status for 204 responses.
_IE_NO_CONTENT = 1223

_ACCEPT = {
    JSON: "application/json",
    TEXT: "text/*",
}
_DEFAULT_ACCEPT = "application/json,text/*;q=0.5,*/*;q=0.1"

_MIME_TYPES = {
    JSON: "application/json;charset=utf-8",
    TEXT: "text/plain;charset=utf-8",
}


@dataclass
class Response:
    """A received response, normalized in place by the connector."""

    status: int = 0
    headers: Dict[str, Any] = field(default_factory=dict)
    entity: Any = None


def _header(headers: Mapping, name: str) -> Any:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.title())
    return value


class Connector(ABC):
    """Base class of all connectors."""

    # Whether cache-control revalidation is honoured on this transport.
    revalidation_supported = True

    def __init__(
        self,
        host: str,
        port: int,
        secure: bool,
        base_path: str,
        enable_telemetry: bool = True,
    ):
        """Initialize a connector for one origin.

        Args:
            host: The host name, without IPv6 brackets.
            port: The port.
            secure: Whether to use https.
            base_path: The API base path, e.g. ``/v1``.
            enable_telemetry: Whether to trace and log exchanges.
        """
        self.host = host
        self.port = port
        self.secure = secure
        self.base_path = base_path
        self.origin = self.to_uri(host, port, secure, "")
        self.gzip = False

        self._tracer, self._logger = (
            get_telemetry("orestes.connector") if enable_telemetry else (None, None)
        )

    @classmethod
    def create(
        cls,
        host: Optional[str] = None,
        port: Optional[int] = None,
        secure: Optional[bool] = None,
        base_path: Optional[str] = None,
    ) -> "Connector":
        """Get the shared connector for an origin from the default registry.

        See ConnectorRegistry.create for the accepted arguments.
        """
        from orestes.connector.registry import get_connector_registry

        return get_connector_registry().create(host, port, secure, base_path)

    @staticmethod
    def to_uri(host: str, port: int, secure: bool, base_path: str) -> str:
        """Build the canonical URI of a connection."""
        uri = ("https://" if secure else "http://") + (f"[{host}]" if ":" in host else host)
        if (secure and port != 443) or (not secure and port != 80):
            uri += f":{port}"
        return uri + base_path

    async def send(self, message: Message) -> Response:
        """Send a message and return the validated response.

        Args:
            message: The message to send; it must not have been sent before.

        Returns:
            The normalized response.

        Raises:
            PersistentError: On any failure, CommunicationError if the
                response status is not accepted by the message.
        """
        if self._tracer:
            with self._tracer.start_as_current_span(
                "orestes.send",
                {"http.method": message.request.method},
            ) as span:
                try:
                    response = await self._send(message)
                    span.set_attribute("http.status_code", response.status)
                    return response
                except Exception as e:
                    span.record_exception(e)
                    raise
        else:
            return await self._send(message)

    async def _send(self, message: Message) -> Response:
        response = Response()
        try:
            if message.sent:
                raise PersistentError(f"{message!r} was already sent")
            message.sent = True

            self.prepare_request(message)
            if self._logger:
                self._logger.info(
                    "request.start",
                    method=message.request.method,
                    path=message.request.path,
                    origin=self.origin,
                )

            response = await self.do_send(message, message.request)
            await self.prepare_response(message, response)
            message.do_receive(response)

            if self._logger:
                self._logger.info(
                    "request.complete",
                    method=message.request.method,
                    path=message.request.path,
                    status=response.status,
                )
            return response
        except Exception as e:
            response.entity = None
            if self._logger:
                self._logger.error(
                    "request.error",
                    method=message.request.method,
                    path=message.request.path,
                    status=response.status,
                    error=str(e),
                    error_type=type(e).__name__,
                )

            error = PersistentError.of(e)
            if error is e:
                raise
            raise error from e

    def prepare_request(self, message: Message) -> None:
        """Complete the request headers and convert the entity for the wire."""
        if not message.get_mime_type():
            mime_type = _MIME_TYPES.get(message.request.type)
            if mime_type:
                message.set_mime_type(mime_type)

        self.to_format(message)

        if not message.get_accept():
            message.set_accept(_ACCEPT.get(message.get_response_type(), _DEFAULT_ACCEPT))

        if not self.revalidation_supported and message.get_cache_control() == NO_CACHE:
            message.force_revalidation()

        if self.gzip:
            if_none_match = message.get_if_none_match()
            if if_none_match and if_none_match not in ('""', "*"):
                message.set_if_none_match(if_none_match[:-1] + '--gzip"')

        token_storage = message.token_storage
        if message.request.path == CONNECT_PATH:
            if token_storage is not None:
                signed = token_storage.sign_path(self.base_path + message.request.path)
                message.request.path = signed[len(self.base_path):]

            if message.get_cache_control():
                has_token = token_storage is not None and token_storage.token
                message.request.path += ("&" if has_token else "?") + "BCB"
        elif token_storage is not None:
            token = token_storage.token
            if token:
                message.set_header("authorization", f"BAT {token}")

    async def prepare_response(self, message: Message, response: Response) -> None:
        """Normalize a received response in place."""
        if response.status == _IE_NO_CONTENT:
            response.status = 204

        headers = response.headers if response.headers is not None else {}
        response.headers = headers

        # Some proxies send content back on 204 responses.
        entity = None if response.status == 204 else response.entity

        type = None
        if entity:
            type = message.get_response_type()
            if not type or response.status >= 400:
                content_type = _header(headers, "content-type")
                if content_type and "application/json" in content_type:
                    type = JSON

        if headers.get("etag"):
            headers["etag"] = headers["etag"].replace("--gzip", "")

        if message.token_storage is not None:
            token = _header(headers, TOKEN_HEADER)
            if token:
                message.token_storage.update(token)

        try:
            result = await self.from_format(response, entity, type) if entity else entity
        except Exception as e:
            raise PersistentError(f"Response was not valid {type}: {e}", e) from e

        response.entity = result

        if CONNECT_PATH in message.request.path and isinstance(result, Mapping):
            self.gzip = bool(result.get("gzip"))
            if self._logger:
                self._logger.debug("connector.gzip", origin=self.origin, gzip=self.gzip)

    @abstractmethod
    async def do_send(self, message: Message, request: Request) -> Response:
        """Perform the exchange for a prepared request.

        Args:
            message: The message being sent.
            request: The prepared request record of the message.

        Returns:
            The raw response; its entity is decoded afterwards by from_format.
        """
        ...

    @abstractmethod
    def to_format(self, message: Message) -> None:
        """Convert the message entity into its wire representation in place."""
        ...

    @abstractmethod
    async def from_format(self, response: Response, entity: Any, type: Optional[str]) -> Any:
        """Convert a received entity into the requested response type."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.origin}{self.base_path})"

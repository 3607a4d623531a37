"""
HTTP connector implementation using httpx.

This module implements the connector transport hooks on top of an
httpx.AsyncClient, including the out-of-band OAuth handshake.
"""

import base64
import io
import json
import webbrowser
from types import TracebackType
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Type

import anyio
import httpx
from anyio.lowlevel import RunVar

from orestes.config import get_config
from orestes.connector.base import RESPONSE_HEADERS, Connector, Response
from orestes.connector.oauth import OAUTH_RESPONSE_KEY, OAuthChannel, parse_notice
from orestes.errors import ConnectionError, ConnectionTimeoutError
from orestes.formats import (
    ARRAYBUFFER,
    BASE64,
    BLOB,
    BUFFER,
    DATA_URL,
    FORM,
    JSON,
    STREAM,
    TEXT,
    Blob,
    FormData,
    ProgressEvent,
    parse_data_url,
    to_base64,
    to_data_url,
)
from orestes.message.message import Message, Request, dump_json
from orestes.message.oauth import OAUTH

OAUTH_CONFLICT_ENTITY = '{"message": "A new OAuth request was sent."}'


def _as_bytes(entity: Any) -> bytes:
    if isinstance(entity, str):
        return entity.encode("utf-8")
    return bytes(entity)


def _is_absolute(path: str) -> bool:
    return path.startswith(("http://", "https://"))


class HTTPConnector(Connector):
    """Connector that talks HTTP(S) through httpx."""

    def __init__(
        self,
        host: str,
        port: int,
        secure: bool,
        base_path: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        follow_redirects: bool = True,
        verify_ssl: bool = True,
        http2: bool = False,
        chunk_size: int = 64 * 1024,
        channel: Optional[OAuthChannel] = None,
        opener: Optional[Callable[[str], Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        enable_telemetry: bool = True,
    ):
        """Initialize the HTTP connector.

        Args:
            host: The host name.
            port: The port.
            secure: Whether to use https.
            base_path: The API base path.
            headers: Default headers sent with every request.
            timeout: Request timeout in seconds, defaults to the configured one.
            follow_redirects: Whether to follow redirects.
            verify_ssl: Whether to verify TLS certificates.
            http2: Whether to enable HTTP/2.
            chunk_size: Upload chunk size when reporting progress.
            channel: The channel OAuth completion notices arrive on.
            opener: Callable that opens an authorization URL for the user,
                ``webbrowser.open`` by default.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
            enable_telemetry: Whether to trace and log exchanges.
        """
        super().__init__(host, port, secure, base_path, enable_telemetry=enable_telemetry)
        self.headers = dict(headers or {})
        self.timeout = timeout if timeout is not None else get_config("timeout")
        self.follow_redirects = follow_redirects
        self.verify_ssl = verify_ssl
        self.http2 = http2
        self.chunk_size = chunk_size
        self.channel = channel if channel is not None else OAuthChannel()
        self.opener = opener or webbrowser.open

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_run: RunVar[Optional[httpx.AsyncClient]] = RunVar(
            f"orestes.http.client.{id(self)}"
        )
        self._oauth_handle: Optional[Callable[[Response], None]] = None

    async def connect(self) -> None:
        """Create the underlying httpx client if it does not exist yet.

        A client bound to an event loop that is no longer running is dropped
        and replaced, since its connection pool cannot be reused.
        """
        if self._client is not None and self._client_run.get(None) is not self._client:
            if self._logger:
                self._logger.debug("client.rebind", origin=self.origin)
            self._client = None
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.origin,
                headers=self.headers,
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
                verify=self.verify_ssl,
                http2=self.http2,
                transport=self._transport,
            )
            self._client_run.set(self._client)

    async def disconnect(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPConnector":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.disconnect()

    def _url(self, path: str) -> str:
        return path if _is_absolute(path) else self.base_path + path

    async def do_send(self, message: Message, request: Request) -> Response:
        if request.method == OAUTH:
            return await self._do_oauth(request)

        await self.connect()

        headers = {name: str(value) for name, value in request.headers.items()}
        body_arguments = self._body_arguments(message, request, headers)
        http_request = self._client.build_request(
            request.method,
            self._url(request.path),
            headers=headers,
            **body_arguments,
        )
        if not message.with_credentials:
            http_request.headers.pop("cookie", None)

        try:
            http_response = await self._client.send(http_request)
        except httpx.TimeoutException as e:
            raise ConnectionTimeoutError(f"Request timed out: {e}", e) from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Failed to establish connection: {e}", e) from e

        response_headers = {
            name: http_response.headers[name]
            for name in RESPONSE_HEADERS
            if name in http_response.headers
        }
        return Response(
            status=http_response.status_code,
            headers=response_headers,
            entity=http_response.content or None,
        )

    def _body_arguments(
        self, message: Message, request: Request, headers: Dict[str, str]
    ) -> Dict[str, Any]:
        entity = request.entity
        if entity is None:
            return {}

        if isinstance(entity, FormData):
            files = {
                name: (name, value.data, value.type or None) if isinstance(value, Blob) else value
                for name, value in entity.files.items()
            }
            return {"data": entity.fields, "files": files or None}

        if isinstance(entity, Blob):
            body = entity.data
        elif hasattr(entity, "read"):
            body = entity.read()
        else:
            body = _as_bytes(entity)

        callback = message.get_progress()
        if callback is not None and body:
            headers.setdefault("content-length", str(len(body)))
            return {"content": self._upload_chunks(body, callback)}

        return {"content": body}

    async def _upload_chunks(
        self, body: bytes, callback: Callable[[ProgressEvent], Any]
    ) -> AsyncIterator[bytes]:
        total = len(body)
        for offset in range(0, total, self.chunk_size):
            chunk = body[offset : offset + self.chunk_size]
            yield chunk
            callback(ProgressEvent(loaded=offset + len(chunk), total=total))

    async def _do_oauth(self, request: Request) -> Response:
        if self._oauth_handle is not None:
            if self._logger:
                self._logger.warning("oauth.superseded", origin=self.origin)
            self._oauth_handle(Response(status=409, entity=OAUTH_CONFLICT_ENTITY))

        self.channel.remove(OAUTH_RESPONSE_KEY)

        done = anyio.Event()
        received: List[Response] = []

        def listener(key: str, value: Any) -> None:
            if key == OAUTH_RESPONSE_KEY and self._oauth_handle is handle:
                notice = parse_notice(value) or {}
                handle(
                    Response(
                        status=int(notice.get("status", 0)),
                        headers=dict(notice.get("headers") or {}),
                        entity=notice.get("entity"),
                    )
                )

        def handle(response: Response) -> None:
            if self._oauth_handle is handle:
                self._oauth_handle = None
            received.append(response)
            self.channel.remove(OAUTH_RESPONSE_KEY)
            self.channel.unsubscribe(listener)
            done.set()

        self._oauth_handle = handle
        self.channel.subscribe(listener)

        url = request.path if _is_absolute(request.path) else self.origin + self._url(request.path)
        if self._logger:
            self._logger.info("oauth.start", origin=self.origin)
        try:
            self.opener(url)
            await done.wait()
        finally:
            if self._oauth_handle is handle:
                self._oauth_handle = None
            self.channel.unsubscribe(listener)
        return received[0]

    def to_format(self, message: Message) -> None:
        type = message.request.type
        if not type:
            return

        entity = message.request.entity
        mime_type = message.get_mime_type()

        if type == BLOB:
            mime_type = mime_type or entity.type or None
        elif type in (ARRAYBUFFER, BUFFER):
            entity = bytes(entity)
        elif type in (FORM, STREAM, TEXT):
            pass
        elif type == DATA_URL:
            data_mime_type, data = parse_data_url(entity)
            mime_type = mime_type or data_mime_type
            entity = Blob(data, mime_type)
            type = BLOB
        elif type == BASE64:
            entity = Blob(base64.b64decode(entity), mime_type or "")
            type = BLOB
        elif type == JSON:
            if not isinstance(entity, str):
                entity = dump_json(entity)
        else:
            raise ValueError(f"Supported request format:{type}")

        message.set_entity(entity, type).set_mime_type(mime_type)

    async def from_format(self, response: Response, entity: Any, type: Optional[str]) -> Any:
        if type == JSON:
            if isinstance(entity, (str, bytes, bytearray)):
                return json.loads(entity)
            return entity

        if type == TEXT:
            return entity.decode("utf-8") if isinstance(entity, (bytes, bytearray)) else entity

        if type == BASE64:
            return await anyio.to_thread.run_sync(to_base64, _as_bytes(entity))

        if type == DATA_URL:
            mime_type = response.headers.get("content-type")
            return await anyio.to_thread.run_sync(to_data_url, _as_bytes(entity), mime_type)

        if type == BLOB:
            return Blob(_as_bytes(entity), response.headers.get("content-type") or "")

        if type in (BUFFER, ARRAYBUFFER):
            return _as_bytes(entity)

        if type == STREAM:
            return io.BytesIO(_as_bytes(entity))

        return entity

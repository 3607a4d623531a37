"""
Registry for connector factories and the connections they created.

The registry resolves connection parameters to a canonical URI and keeps at
most one connector per URI, so every message sent to the same origin shares
one connector and thus one gzip capability flag.
"""

import re
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from orestes.config import get_config, merge_configs
from orestes.connector.base import Connector
from orestes.connector.factory import ConnectorFactory
from orestes.connector.http.factory import HTTPConnectorFactory
from orestes.errors import ConfigurationError
from orestes.telemetry import get_telemetry

_URI_PATTERN = re.compile(r"^(https?)://([^/:]+|\[[^\]]+\])(:(\d*))?(/\w+)?/?$")
_APP_NAME_PATTERN = re.compile(r"^[a-z0-9-]*$")


class ConnectorRegistry:
    """Registry for connector factories and cached connections."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None, enable_telemetry: bool = True):
        """Initialize a new connector registry.

        Args:
            config: Optional configuration overriding environment and defaults
                (``location``, ``base_path``, ``http_domain``).
            enable_telemetry: Whether to log connector creation.
        """
        self._factories: List[ConnectorFactory] = []
        self._config = merge_configs(config)
        self.connections: Dict[str, Connector] = {}
        _, self._logger = (
            get_telemetry("orestes.connector.registry") if enable_telemetry else (None, None)
        )

    def register(self, factory: ConnectorFactory) -> None:
        """Register a connector factory.

        Factories registered later are asked first.

        Args:
            factory: The factory instance.
        """
        self._factories.append(factory)

    def get_factories(self) -> List[ConnectorFactory]:
        """Get the registered factories in registration order."""
        return list(self._factories)

    def create(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        secure: Optional[bool] = None,
        base_path: Optional[str] = None,
    ) -> Connector:
        """Get or create the connector for an origin.

        Args:
            host: A host name, an app name or a full URI such as
                ``https://example.com:8443/v1``. Defaults to the host of the
                configured ``location``.
            port: The port; defaults to 443 or 80 depending on ``secure``.
            secure: Whether to use https; defaults to the scheme of the
                configured ``location``.
            base_path: The API base path; defaults to the configured one.

        Returns:
            The cached or newly created connector.

        Raises:
            ConfigurationError: If the URI is invalid, no host can be
                determined or no registered factory is usable.
        """
        location = get_config("location", self._config)
        if location:
            parsed = urlsplit(location)
            if not host:
                host = parsed.hostname
                port = parsed.port
            if secure is None:
                secure = parsed.scheme == "https"

        secure = bool(secure)
        if base_path is None:
            base_path = get_config("base_path", self._config)

        if not host:
            raise ConfigurationError("No host was given and no location is configured")

        if "/" in host:
            match = _URI_PATTERN.match(host)
            if match is None:
                raise ConfigurationError(f"The connection uri host {host} seems not to be valid")
            secure = match.group(1) == "https"
            host = match.group(2).replace("[", "").replace("]", "")
            port = match.group(4)
            base_path = match.group(5) or ""
        elif host != "localhost" and _APP_NAME_PATTERN.match(host):
            # app names are resolved below the hosting domain
            host += get_config("http_domain", self._config)

        port = int(port) if port else (443 if secure else 80)

        uri = Connector.to_uri(host, port, secure, base_path)
        connector = self.connections.get(uri)
        if connector is None:
            for factory in reversed(self._factories):
                if factory.is_usable(host, port, secure, base_path):
                    connector = factory.create_connector(host, port, secure, base_path)
                    break

            if connector is None:
                raise ConfigurationError("No connector is usable for the requested connection.")

            self.connections[uri] = connector
            if self._logger:
                self._logger.info(
                    "connector.created",
                    uri=uri,
                    connector_type=type(connector).__name__,
                )

        return connector


_default_registry: Optional[ConnectorRegistry] = None


def get_connector_registry() -> ConnectorRegistry:
    """Get the default registry, with the HTTP connector factory registered.

    Returns:
        The process-wide connector registry.
    """
    global _default_registry
    if _default_registry is None:
        registry = ConnectorRegistry()
        registry.register(HTTPConnectorFactory())
        _default_registry = registry
    return _default_registry

"""
HTTP connector factory implementation.

This module provides a factory for creating HTTP connector instances.
"""

from typing import Any

from orestes.connector.http.connector import HTTPConnector


class HTTPConnectorFactory:
    """Factory for creating HTTP connector instances."""

    def __init__(self, **connector_options: Any):
        """Initialize the factory.

        Args:
            **connector_options: Default options passed to every HTTPConnector,
                e.g. ``timeout``, ``headers``, ``channel`` or ``transport``.
        """
        self.connector_options = connector_options

    def is_usable(self, host: str, port: int, secure: bool, base_path: str) -> bool:
        """httpx can reach any origin."""
        return True

    def create_connector(
        self, host: str, port: int, secure: bool, base_path: str, **kwargs: Any
    ) -> HTTPConnector:
        """Create a new HTTP connector instance.

        Args:
            host: The host name.
            port: The port.
            secure: Whether to use https.
            base_path: The API base path.
            **kwargs: Options overriding the factory defaults.

        Returns:
            A new HTTP connector instance.
        """
        options = {**self.connector_options, **kwargs}
        return HTTPConnector(host, port, secure, base_path, **options)

"""
Factory protocol for connectors.

Factories are registered with a ConnectorRegistry; the registry asks each
one, most recently registered first, whether it can serve an origin.
"""

from typing import Protocol, runtime_checkable

from orestes.connector.base import Connector


@runtime_checkable
class ConnectorFactory(Protocol):
    """Creates connectors for the origins it can serve."""

    def is_usable(self, host: str, port: int, secure: bool, base_path: str) -> bool:
        """Indicate whether this factory can connect to the given origin.

        Args:
            host: The host name.
            port: The port.
            secure: Whether the connection uses https.
            base_path: The API base path.

        Returns:
            True if create_connector may be called for this origin.
        """
        ...

    def create_connector(self, host: str, port: int, secure: bool, base_path: str) -> Connector:
        """Create a new connector for the given origin.

        Args:
            host: The host name.
            port: The port.
            secure: Whether the connection uses https.
            base_path: The API base path.

        Returns:
            A new connector instance.
        """
        ...

"""
orestes: message and connector layer for the Orestes object-database protocol.
"""

from orestes.connector import (
    Connector,
    ConnectorRegistry,
    HTTPConnector,
    HTTPConnectorFactory,
    OAuthChannel,
    Response,
    get_connector_registry,
)
from orestes.errors import (
    CommunicationError,
    ConfigurationError,
    ConnectionError,
    ConnectionTimeoutError,
    PersistentError,
)
from orestes.formats import Blob, FormData, ProgressEvent
from orestes.message import Connect, Message, StatusCode
from orestes.token_storage import MemoryTokenStorage, TokenStorage

__version__ = "0.1.0"

__all__ = [
    "Blob",
    "CommunicationError",
    "ConfigurationError",
    "Connect",
    "ConnectionError",
    "ConnectionTimeoutError",
    "Connector",
    "ConnectorRegistry",
    "FormData",
    "HTTPConnector",
    "HTTPConnectorFactory",
    "MemoryTokenStorage",
    "Message",
    "OAuthChannel",
    "PersistentError",
    "ProgressEvent",
    "Response",
    "StatusCode",
    "TokenStorage",
    "get_connector_registry",
]

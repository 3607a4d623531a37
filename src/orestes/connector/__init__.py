"""
Connector layer for orestes.

A connector prepares messages for one origin, dispatches them through its
transport and normalizes the responses. Connectors are obtained from a
ConnectorRegistry, which selects a factory and caches one connector per
canonical URI.
"""

from orestes.connector.base import RESPONSE_HEADERS, Connector, Response
from orestes.connector.factory import ConnectorFactory
from orestes.connector.http import HTTPConnector, HTTPConnectorFactory
from orestes.connector.oauth import OAUTH_RESPONSE_KEY, OAuthChannel
from orestes.connector.registry import ConnectorRegistry, get_connector_registry

__all__ = [
    "Connector",
    "ConnectorFactory",
    "ConnectorRegistry",
    "HTTPConnector",
    "HTTPConnectorFactory",
    "OAUTH_RESPONSE_KEY",
    "OAuthChannel",
    "RESPONSE_HEADERS",
    "Response",
    "get_connector_registry",
]

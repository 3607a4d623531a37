"""
HTTP connector for orestes.

This package provides the httpx based connector implementation.
"""

from orestes.connector.http.connector import HTTPConnector
from orestes.connector.http.factory import HTTPConnectorFactory

__all__ = [
    "HTTPConnector",
    "HTTPConnectorFactory",
]

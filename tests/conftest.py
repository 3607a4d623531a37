"""
Pytest configuration for orestes tests.

This module contains fixtures and configuration for pytest.
"""

import json
from typing import Any, List, Optional

import pytest

from orestes.connector.base import Connector, Response
from orestes.connector.registry import ConnectorRegistry
from orestes.message.message import Message, Request
from orestes.token_storage import MemoryTokenStorage


class MockConnector(Connector):
    """Connector that answers from a queue of prepared responses."""

    def __init__(self, host="localhost", port=8080, secure=False, base_path="/v1", responses=None):
        super().__init__(host, port, secure, base_path, enable_telemetry=False)
        self.responses: List[Any] = list(responses or [])
        self.requests: List[Request] = []
        self.raise_on_send: Optional[BaseException] = None

    async def do_send(self, message: Message, request: Request) -> Response:
        self.requests.append(request)
        if self.raise_on_send:
            raise self.raise_on_send
        response = self.responses.pop(0)
        return Response(response.status, dict(response.headers), response.entity)

    def to_format(self, message: Message) -> None:
        pass

    async def from_format(self, response: Response, entity: Any, type: Optional[str]) -> Any:
        if type == "json" and isinstance(entity, str):
            return json.loads(entity)
        return entity


class MockConnectorFactory:
    """Factory whose usability can be toggled."""

    def __init__(self, usable=True):
        self.usable = usable
        self.created = []

    def is_usable(self, host, port, secure, base_path):
        return self.usable

    def create_connector(self, host, port, secure, base_path):
        connector = MockConnector(host, port, secure, base_path)
        self.created.append(connector)
        return connector


@pytest.fixture
def mock_connector():
    """Fixture providing a mock connector."""
    return MockConnector()


@pytest.fixture
def mock_factory():
    """Fixture providing a usable mock connector factory."""
    return MockConnectorFactory()


@pytest.fixture
def registry(mock_factory):
    """Fixture providing an isolated registry with the mock factory registered."""
    registry = ConnectorRegistry(config={"location": None}, enable_telemetry=False)
    registry.register(mock_factory)
    return registry


@pytest.fixture
def token_storage():
    """Fixture providing an in-memory token storage."""
    return MemoryTokenStorage()


@pytest.fixture
def get_object():
    """Fixture providing a simple GET message class."""
    return Message.create(method="GET", path="/db/:bucket/:oid?depth", status=[200])


@pytest.fixture(autouse=True)
def clear_orestes_env(monkeypatch):
    """Make sure tests do not pick up configuration from the environment."""
    for key in ("BASE_PATH", "HTTP_DOMAIN", "REVALIDATION_SUPPORTED", "LOCATION", "TIMEOUT"):
        monkeypatch.delenv(f"ORESTES_{key}", raising=False)


@pytest.fixture
def make_factory():
    """Fixture providing the mock factory class for tests needing several factories."""
    return MockConnectorFactory

"""
Out-of-band channel for OAuth completion notices.

The authorization flow ends outside the connector, for example in a local
redirect handler. That handler publishes the result under
OAUTH_RESPONSE_KEY; connectors waiting for a handshake subscribe to the
channel and pick it up.
"""

import json
from typing import Any, Callable, List, Mapping, Optional, Union

OAUTH_RESPONSE_KEY = "oauth-response"

Listener = Callable[[str, Any], None]


class OAuthChannel:
    """Key/value store that notifies listeners of every published value."""

    def __init__(self):
        self._values: dict = {}
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def publish(self, key: str, value: Union[str, Mapping[str, Any]]) -> None:
        """Store a value and notify all current listeners.

        Args:
            key: The key, usually OAUTH_RESPONSE_KEY.
            value: A JSON string or a mapping with ``status`` and ``entity``.
        """
        self._values[key] = value
        # listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(key, value)

    def publish_response(self, status: int, entity: Any = None) -> None:
        """Publish an OAuth completion notice."""
        self.publish(OAUTH_RESPONSE_KEY, {"status": status, "entity": entity})


def parse_notice(value: Union[str, Mapping[str, Any], None]) -> Optional[Mapping[str, Any]]:
    """Decode a published completion notice."""
    if value is None:
        return None
    if isinstance(value, str):
        return json.loads(value)
    return value

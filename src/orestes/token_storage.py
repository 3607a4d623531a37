"""
Bearer token storage.

A TokenStorage is shared by every message that references it; any response
may replace the token and all later messages observe the new value.
"""

from typing import Optional, Protocol, runtime_checkable
from urllib.parse import quote

from orestes.telemetry import get_telemetry


@runtime_checkable
class TokenStorage(Protocol):
    """Holder of the current bearer token."""

    token: Optional[str]

    def sign_path(self, path: str) -> str:
        """Embed the current credentials into a request path."""
        ...

    def update(self, token: Optional[str]) -> None:
        """Replace the current token with one received from the server."""
        ...


class MemoryTokenStorage:
    """Keeps the token in process memory only."""

    def __init__(self, token: Optional[str] = None):
        self.token = token
        _, self._logger = get_telemetry("orestes.token_storage")

    def sign_path(self, path: str) -> str:
        if not self.token:
            return path

        separator = "&" if "?" in path else "?"
        return f"{path}{separator}BAT={quote(self.token, safe='')}"

    def update(self, token: Optional[str]) -> None:
        self.token = token or None
        self._logger.debug("token.updated", has_token=self.token is not None)

    def __repr__(self) -> str:
        return f"MemoryTokenStorage(has_token={self.token is not None})"

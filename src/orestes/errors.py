"""
Error hierarchy for orestes.

Every failure that leaves a connector is a PersistentError. A
CommunicationError is the special case where a response arrived but its
status is not one the message accepts.
"""

from typing import Any, Optional


class PersistentError(Exception):
    """Base class for all orestes errors."""

    default_message = "An unexpected persistent error occurred."

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        """Initialize a new persistent error.

        Args:
            message: The error message, a generic message is used if omitted.
            cause: The optional underlying error.
        """
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def of(cls, error: BaseException) -> "PersistentError":
        """Wrap an error into a PersistentError unless it already is one.

        Args:
            error: The error to wrap.

        Returns:
            The error itself, or a new PersistentError caused by it.
        """
        if isinstance(error, PersistentError):
            return error

        return PersistentError(None, error)


class CommunicationError(PersistentError):
    """The server answered with a status the message does not accept."""

    def __init__(self, http_message: Any, response: Any):
        """Initialize a new communication error.

        Args:
            http_message: The message whose response was rejected.
            response: The received response record.
        """
        entity = response.entity if isinstance(response.entity, dict) else {}
        state = "Request" if response.status == 0 else "Response"
        request = http_message.request
        message = entity.get("message") or (
            f"Handling the {state} for {request.method} {request.path}"
        )

        cause = entity.get("cause")
        super().__init__(message)

        self.http_message = http_message
        self.response = response
        self.status = response.status
        self.class_name = entity.get("className") or "CommunicationError"
        self.reason = entity.get("reason") or "Communication failed"
        self.data = entity.get("data")
        self.server_cause = cause


class ConfigurationError(PersistentError):
    """Invalid connection parameters or no usable connector."""

    pass


class ConnectionError(PersistentError):
    """The connection to the remote service failed."""

    pass


class ConnectionTimeoutError(ConnectionError):
    """The connection to the remote service timed out."""

    pass

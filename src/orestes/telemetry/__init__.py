"""
Telemetry module for orestes.

This module provides the observability features for orestes: tracing via
OpenTelemetry and structured logging via structlog.
"""

from orestes.telemetry.config import configure_telemetry
from orestes.telemetry.facade import LoggingFacade, TracingFacade


def get_telemetry(name: str) -> tuple:
    """
    Get tracer and logger instances for the given name.

    Args:
        name: The name to use for the tracer and logger

    Returns:
        A tuple containing a tracer and logger
    """
    return TracingFacade(name), LoggingFacade(name)


__all__ = [
    "LoggingFacade",
    "TracingFacade",
    "configure_telemetry",
    "get_telemetry",
]

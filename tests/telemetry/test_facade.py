"""Tests for the telemetry facades."""

from unittest.mock import MagicMock, patch

import pytest

from orestes.telemetry import get_telemetry
from orestes.telemetry.facade import LoggingFacade, TracingFacade


def _span(valid: bool):
    span = MagicMock()
    context = span.get_span_context.return_value
    context.is_valid = valid
    context.trace_id = 0x1234
    context.span_id = 0x5678
    return span


def test_tracing_facade_init():
    """Test TracingFacade initialization."""
    mock_tracer = MagicMock()
    with patch("orestes.telemetry.facade.trace.get_tracer", return_value=mock_tracer) as get_tracer:
        tracer = TracingFacade("test_tracer")

    assert tracer.name == "test_tracer"
    assert tracer.tracer is mock_tracer
    get_tracer.assert_called_once_with("test_tracer")


def test_tracing_facade_start_span():
    """Test TracingFacade.start_span."""
    mock_tracer = MagicMock()
    with patch("orestes.telemetry.facade.trace.get_tracer", return_value=mock_tracer):
        tracer = TracingFacade("test_tracer")

    span = tracer.start_span("test_span", {"key": "value"})

    assert span is mock_tracer.start_span.return_value
    mock_tracer.start_span.assert_called_once_with("test_span", attributes={"key": "value"})


def test_tracing_facade_start_as_current_span():
    """Test TracingFacade.start_as_current_span."""
    mock_tracer = MagicMock()
    with patch("orestes.telemetry.facade.trace.get_tracer", return_value=mock_tracer):
        tracer = TracingFacade("test_tracer")

    span = tracer.start_as_current_span("test_span", {"key": "value"})

    assert span is mock_tracer.start_as_current_span.return_value
    mock_tracer.start_as_current_span.assert_called_once_with(
        "test_span", attributes={"key": "value"}
    )


def test_logging_facade_init():
    """Test LoggingFacade initialization."""
    mock_logger = MagicMock()
    with patch("orestes.telemetry.facade.structlog.get_logger", return_value=mock_logger):
        logger = LoggingFacade("test_logger")

    assert logger.name == "test_logger"
    assert logger.logger is mock_logger


@pytest.mark.parametrize("method", ["debug", "info", "warning", "error", "critical"])
def test_logging_facade_without_span(method):
    """Events outside a span are logged without trace context."""
    mock_logger = MagicMock()
    span = _span(valid=False)
    with patch("orestes.telemetry.facade.structlog.get_logger", return_value=mock_logger):
        logger = LoggingFacade("test_logger")

    with patch("orestes.telemetry.facade.trace.get_current_span", return_value=span):
        getattr(logger, method)("test_event", key="value")

    getattr(mock_logger, method).assert_called_once_with("test_event", key="value")
    span.set_status.assert_not_called()


@pytest.mark.parametrize("method", ["debug", "info", "warning"])
def test_logging_facade_adds_trace_context(method):
    """Events inside a span carry its trace and span ids."""
    mock_logger = MagicMock()
    span = _span(valid=True)
    with patch("orestes.telemetry.facade.structlog.get_logger", return_value=mock_logger):
        logger = LoggingFacade("test_logger")

    with patch("orestes.telemetry.facade.trace.get_current_span", return_value=span):
        getattr(logger, method)("test_event", key="value")

    getattr(mock_logger, method).assert_called_once_with(
        "test_event",
        key="value",
        trace_id=format(0x1234, "032x"),
        span_id=format(0x5678, "016x"),
    )
    span.set_status.assert_not_called()


@pytest.mark.parametrize("method", ["error", "critical"])
def test_logging_facade_marks_span_failed(method):
    """Error events flag the current span as failed."""
    mock_logger = MagicMock()
    span = _span(valid=True)
    with patch("orestes.telemetry.facade.structlog.get_logger", return_value=mock_logger):
        logger = LoggingFacade("test_logger")

    with patch("orestes.telemetry.facade.trace.get_current_span", return_value=span):
        getattr(logger, method)("test_event")

    span.set_status.assert_called_once()
    status = span.set_status.call_args[0][0]
    assert status.description == "test_event"


def test_get_telemetry():
    """get_telemetry returns a tracer and a logger of the same name."""
    tracer, logger = get_telemetry("orestes.test")

    assert isinstance(tracer, TracingFacade)
    assert isinstance(logger, LoggingFacade)
    assert tracer.name == logger.name == "orestes.test"

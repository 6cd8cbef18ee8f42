"""Test cases for structured logging setup."""

import json
import logging

import pytest
import structlog
from asgi_correlation_id import correlation_id

from problem_advice.core.logging_config import UVICORN_LOGGERS, add_request_id, setup_logging
from problem_advice.main_config import LoggingConfig


@pytest.fixture
def restore_logging():
    """Put back the logging configuration a test replaced."""
    loggers = [logging.getLogger(), *(logging.getLogger(name) for name in UVICORN_LOGGERS)]
    saved = [(lg, lg.handlers[:], lg.level, lg.propagate) for lg in loggers]
    config = structlog.get_config()
    yield
    structlog.configure(**config)
    for lg, handlers, level, propagate in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def test_request_id_added_when_set() -> None:
    """Test the correlation id is copied onto the event."""
    token = correlation_id.set("req-1")
    try:
        event = add_request_id(None, "info", {"event": "x"})
    finally:
        correlation_id.reset(token)

    assert event == {"event": "x", "request_id": "req-1"}


def test_request_id_omitted_outside_requests() -> None:
    """Test events outside a request are left alone."""
    assert add_request_id(None, "info", {"event": "x"}) == {"event": "x"}


def test_json_format_renders_server_errors_as_objects(
    restore_logging: None, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test a server error line is one JSON object with a structured traceback."""
    setup_logging(LoggingConfig(level="INFO", format="json"))
    logger = structlog.get_logger("problem_advice")

    token = correlation_id.set("req-2")
    try:
        try:
            raise ValueError("boom")
        except ValueError as exc:
            logger.error("Internal Server Error", exc_info=exc)
    finally:
        correlation_id.reset(token)

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "Internal Server Error"
    assert record["level"] == "error"
    assert record["logger"] == "problem_advice"
    assert record["request_id"] == "req-2"
    assert record["exception"][0]["exc_type"] == "ValueError"
    assert record["exception"][0]["exc_value"] == "boom"


def test_console_format_routes_uvicorn_through_root_handler(restore_logging: None) -> None:
    """Test uvicorn loggers share the root handler and stop propagating."""
    setup_logging(LoggingConfig(level="warning", format="console"))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        assert uvicorn_logger.handlers == root.handlers
        assert uvicorn_logger.propagate is False

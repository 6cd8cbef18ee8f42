"""Structured logging for problem responses.

``ProblemAdvice.log`` writes one line per mapped exception through structlog:
a warning for client errors and an error carrying the exception for server
errors. This module routes those lines, together with uvicorn's, through one
stdlib handler:

- console format: key-value lines, tracebacks rendered inline
- json format: one JSON object per line, tracebacks as structured frames
- the request id from asgi-correlation-id on every line

Usage:
    from problem_advice.core.logging_config import setup_logging
    setup_logging()  # Call once at app startup
"""

import logging
import sys
from typing import Any

import structlog
from asgi_correlation_id import correlation_id
from structlog.typing import Processor

from problem_advice.main_config import LoggingConfig, get_logging_config

__all__ = ["add_request_id", "setup_logging"]

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def add_request_id(_logger: Any, _method_name: str, event_dict: dict) -> dict:
    """Add request_id from asgi-correlation-id contextvar to log events."""
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _select_renderer(config: LoggingConfig) -> tuple[list[Processor], Processor]:
    """Exception processors and final renderer for the configured format."""
    if config.format == "json":
        return [structlog.processors.dict_tracebacks], structlog.processors.JSONRenderer()
    return [], structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog over stdlib logging for the entire application.

    Call this once before creating the FastAPI app.
    """
    config = config or get_logging_config()
    log_level = config.level.upper()
    exception_processors, renderer = _select_renderer(config)

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_request_id,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        *exception_processors,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn installs its own handlers; send its lines through ours instead
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.propagate = False
        uvicorn_logger.setLevel(log_level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_format=config.format,
        log_level=log_level,
    )

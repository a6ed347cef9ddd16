"""Logging handlers and utility functions."""

import enum
import logging
import traceback
from typing import Optional

from .formatters import LogError, LogRecord


class LogEvent(enum.Enum):
    FASTAPI_STARTUP_COMPLETE = "fastapi_startup_complete"
    FASTAPI_SHUTDOWN = "fastapi_shutdown"
    CONFIG_LOAD_FAILED = "config_load_failed"
    HTTP_REQUEST = "http_request"
    UNHANDLED_EXCEPTION = "unhandled_exception"
    OAUTH_REDIRECT = "oauth_redirect"
    OAUTH_CODE_MISSING = "oauth_code_missing"
    TOKEN_EXCHANGE_REQUEST = "token_exchange_request"
    TOKEN_EXCHANGE_SUCCESS = "token_exchange_success"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    TOKEN_STORED = "token_stored"
    TOKEN_REPLACED = "token_replaced"
    TOKEN_CLEARED = "token_cleared"
    SESSION_MISSING = "session_missing"
    PARAMETER_MISSING = "parameter_missing"
    INVALID_REQUEST_BODY = "invalid_request_body"
    UPSTREAM_REQUEST = "upstream_request"
    UPSTREAM_RESPONSE = "upstream_response"
    UPSTREAM_REJECTED = "upstream_rejected"
    UPSTREAM_FAILURE = "upstream_failure"
    DEMO_COLOR_UNKNOWN = "demo_color_unknown"


_logger = None


def init_logger(app_name: str = "calendly-relay"):
    """Initialize the logger for this module."""
    global _logger
    _logger = logging.getLogger(app_name)


def _log(level: int, record: LogRecord, exc: Optional[Exception] = None) -> None:
    if _logger is None:
        init_logger()

    if exc is not None:
        record.error = LogError(
            name=type(exc).__name__,
            message=str(exc),
            stack_trace="".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
            args=exc.args,
        )
        if not record.message:
            record.message = str(exc) or "An unspecified error occurred"

    _logger.log(level=level, msg=record.message, extra={"log_record": record})


def debug(record: LogRecord):
    """Log a debug message."""
    _log(logging.DEBUG, record)


def info(record: LogRecord):
    """Log an info message."""
    _log(logging.INFO, record)


def warning(record: LogRecord, exc: Optional[Exception] = None):
    """Log a warning message."""
    _log(logging.WARNING, record, exc=exc)


def error(record: LogRecord, exc: Optional[Exception] = None):
    """Log an error message."""
    _log(logging.ERROR, record, exc=exc)


def critical(record: LogRecord, exc: Optional[Exception] = None):
    """Log a critical message."""
    _log(logging.CRITICAL, record, exc=exc)

"""Tests for logging configuration."""

import json
import logging
import os
from unittest.mock import patch

from rocketmq_dashboard_auth.logging import (
    SERVER_LOGGERS,
    JSONFormatter,
    configure_logging,
    get_log_level,
    get_uvicorn_log_config,
)


def test_get_log_level() -> None:
    """Test LOG_LEVEL parsing with INFO fallback."""
    with patch.dict(os.environ, {"LOG_LEVEL": "warning"}):
        assert get_log_level() == logging.WARNING
    with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}):
        assert get_log_level() == logging.INFO
    with patch.dict(os.environ, {}, clear=True):
        assert get_log_level() == logging.INFO


def test_configure_logging_sets_levels() -> None:
    """Test LOG_LEVEL controls the root and server logger levels."""
    with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
        configure_logging()

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    for name in SERVER_LOGGERS:
        assert logging.getLogger(name).level == logging.DEBUG


def test_json_formatter_output() -> None:
    """Test stdlib records are rendered as JSON."""
    record = logging.LogRecord(
        "uvicorn", logging.WARNING, __file__, 1, "port %s busy", (8080,), None
    )

    entry = json.loads(JSONFormatter().format(record))

    assert entry["event"] == "port 8080 busy"
    assert entry["level"] == "warning"
    assert entry["logger"] == "uvicorn"
    assert entry["timestamp"].endswith("+00:00")


def test_uvicorn_log_config() -> None:
    """Test the uvicorn config points at our JSON formatter and level."""
    with patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}):
        config = get_uvicorn_log_config()

    assert (
        config["formatters"]["json"]["()"]
        == "rocketmq_dashboard_auth.logging.JSONFormatter"
    )
    assert set(config["loggers"]) == set(SERVER_LOGGERS)
    assert config["loggers"]["uvicorn.access"]["level"] == "ERROR"

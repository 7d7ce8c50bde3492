"""
Tests for the logging helpers.
"""

import logging

from gpcamera.config import LoggingConfig
from gpcamera.logger import (
    PACKAGE_LOGGER,
    TRACE,
    UnifiedFormatter,
    configure_logging,
    get_logger,
    level_from_string,
)


def test_trace_level_registered():
    """Test TRACE is a named level below DEBUG."""
    assert TRACE < logging.DEBUG
    assert logging.getLevelName(TRACE) == "TRACE"


def test_level_from_string():
    """Test level names map to numeric levels."""
    assert level_from_string("trace") == TRACE
    assert level_from_string("WARN") == logging.WARNING
    assert level_from_string("fatal") == logging.CRITICAL
    assert level_from_string("bogus") == logging.INFO


def test_unified_formatter_truncates_level():
    """Test the formatter shortens level names and restores the record."""
    record = logging.LogRecord("gpcamera.camera", logging.WARNING, __file__, 1,
                               "port reset", None, None)

    output = UnifiedFormatter().format(record)

    assert "[WRN] [gpcamera.camera] port reset" in output
    assert record.levelname == "WARNING"


def test_get_logger_with_file(tmp_path):
    """Test a log directory adds a file handler."""
    logger = get_logger("gpcamera.test", log_dir=str(tmp_path))

    assert len(logger.handlers) == 2
    assert (tmp_path / "gpcamera.test.log").exists()
    for handler in logger.handlers:
        handler.close()


def test_configure_logging():
    """Test configure_logging sets up the package logger."""
    logger = configure_logging(LoggingConfig(level="DEBUG"))

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    logger.handlers = []

"""
Logging for gpcamera.

A level-based logging setup on top of Python's standard logging module, with
a TRACE level for per native call logging. structlog is configured to render
through the same handlers so key/value events from the camera code end up in
the same stream.
"""

import logging
import logging.handlers
import os

import structlog

# TRACE (5) is more detailed than DEBUG (10)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER = "gpcamera"


class UnifiedFormatter(logging.Formatter):
    """
    Formatter with timestamps, truncated log levels and logger names,
    shared by console and file output.
    """

    level_map = {
        'CRITICAL': 'CRI',
        'ERROR': 'ERR',
        'WARNING': 'WRN',
        'INFO': 'INF',
        'DEBUG': 'DBG',
        'TRACE': 'TRC',
    }

    def __init__(self):
        # YYYY-MM-DD HH:MM:SS [LVL] [logger_name] Message
        super().__init__('%(asctime)s [%(levelname)3.3s] [%(name)s] %(message)s',
                         datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        original_levelname = record.levelname
        record.levelname = self.level_map.get(record.levelname, record.levelname)
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def setup_file_logging(log_dir, log_file_base_name):
    """
    Set up file logging with daily rotation.

    Args:
        log_dir: Directory to store log files
        log_file_base_name: Base name for log files

    Returns:
        Configured file handler
    """
    os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        os.path.join(log_dir, f"{log_file_base_name}.log"),
        when='midnight',
        backupCount=7
    )
    file_handler.setFormatter(UnifiedFormatter())
    return file_handler


def setup_console_logging():
    """Set up console logging with the unified formatter."""
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(UnifiedFormatter())
    return console_handler


def get_logger(name, log_dir=None, console_level=logging.INFO, file_level=logging.DEBUG):
    """
    Get a configured logger with the specified name.

    Args:
        name: Logger name
        log_dir: Directory for log files (if None, file logging is disabled)
        console_level: Logging level for console output
        file_level: Logging level for file output

    Returns:
        A configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers = []
    logger.setLevel(min(console_level, file_level if log_dir else console_level))

    console_handler = setup_console_logging()
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_dir:
        file_handler = setup_file_logging(log_dir, name)
        file_handler.setLevel(file_level)
        logger.addHandler(file_handler)

    return logger


def level_from_string(level_name):
    """Convert a level name to its numeric value."""
    level_map = {
        'trace': TRACE,
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warning': logging.WARNING,
        'warn': logging.WARNING,
        'error': logging.ERROR,
        'critical': logging.CRITICAL,
        'fatal': logging.CRITICAL,
    }
    return level_map.get(level_name.lower(), logging.INFO)


def configure_logging(logging_config):
    """
    Configure the gpcamera logger tree and structlog from a LoggingConfig.

    Returns:
        The package logger
    """
    level = level_from_string(logging_config.level)
    log_dir = logging_config.log_path if logging_config.log_to_file else None
    logger = get_logger(PACKAGE_LOGGER, log_dir=log_dir, console_level=level,
                        file_level=min(level, logging.DEBUG))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return logger

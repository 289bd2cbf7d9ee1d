"""
Structured logging configuration for the FHIR JSON validator.

Records are written as single-line JSON so that the host test bed can ship
them to its log collector unchanged.
"""

import json
import logging
import sys
import time
from datetime import datetime

PACKAGE_LOGGER = "fhir_json_validator"
_HANDLER_NAME = "fhir_json_validator.json"


class JsonFormatter(logging.Formatter):
    """Format log records as JSON objects."""

    def format(self, record):
        # Extract standard attributes
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        # Add any extra attributes passed via log_with_context
        for key, value in getattr(record, "extras", {}).items():
            log_data[key] = value

        # Add exception info if present
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_data, default=str)


def configure_logging(level="INFO", json_format=True, stream=None):
    """Configure logging for the validator package.

    Installs one stream handler on the package logger. Calling this again
    replaces the handler instead of adding a second one.

    Args:
        level: Log level name or number.
        json_format: Emit JSON records when True, plain text otherwise.
        stream: Output stream, defaults to stderr.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name):
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def log_with_context(logger, level, message, **context):
    """Log with additional context as structured fields."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger.log(level, message, extra={"extras": context})


class LogDuration:
    """Context manager that measures a block in milliseconds."""

    def __init__(self):
        self.start_time = None
        self.elapsed_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000.0
        return False

"""
Unit tests for structured logging.
"""

import io
import json
import logging
import sys

import pytest

from fhir_json_validator.utils.logging import (
    PACKAGE_LOGGER,
    JsonFormatter,
    LogDuration,
    configure_logging,
    get_logger,
    log_with_context,
)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestJsonLogging:
    """Tests for JSON log records."""

    def test_context_fields_are_included(self, package_logger):
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)

        log_with_context(get_logger("fhir_json_validator.test"), "info", "Validation completed", result="SUCCESS")

        record = json.loads(stream.getvalue().strip())
        assert record["message"] == "Validation completed"
        assert record["level"] == "INFO"
        assert record["logger"] == "fhir_json_validator.test"
        assert record["result"] == "SUCCESS"

    def test_exception_info(self):
        try:
            raise ValueError("bad input")
        except ValueError:
            record = logging.LogRecord(
                "fhir_json_validator", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(JsonFormatter().format(record))
        assert data["exception"] == {"type": "ValueError", "message": "bad input"}

    def test_configure_twice_keeps_one_handler(self, package_logger):
        configure_logging(stream=io.StringIO())
        configure_logging(stream=io.StringIO())

        named = [h for h in package_logger.handlers if h.get_name() == "fhir_json_validator.json"]
        assert len(named) == 1

    def test_plain_format(self, package_logger):
        stream = io.StringIO()
        configure_logging(level=logging.DEBUG, json_format=False, stream=stream)

        get_logger("fhir_json_validator.test").debug("plain message")

        assert "DEBUG fhir_json_validator.test: plain message" in stream.getvalue()


class TestLogDuration:
    """Tests for the duration helper."""

    def test_measures_elapsed_time(self):
        with LogDuration() as duration:
            sum(range(1000))

        assert duration.elapsed_ms >= 0.0

"""
Unit tests for the validation command-line interface.
"""

import base64
import io
import json
import logging
from unittest import mock

import pytest

from conftest import IG_URL, MALFORMED_JSON, PATIENT_JSON, RecordingParser
from fhir_json_validator.cli.validate import build_input, build_parser, main
from fhir_json_validator.utils.logging import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def recording_parser():
    parser = RecordingParser()
    with mock.patch(
        "fhir_json_validator.domain.validation.validator.FhirResourceParser",
        return_value=parser,
    ):
        yield parser


def run(argv, stdin=None):
    out = io.StringIO()
    code = main(argv, stdin=stdin, stdout=out)
    return code, out.getvalue()


class TestBuildInput:
    """Tests for mapping arguments onto validation parameters."""

    def test_only_given_options_are_included(self):
        args = build_parser().parse_args([PATIENT_JSON, "--ig", IG_URL])

        assert build_input(args) == {"contentToValidate": PATIENT_JSON, "ig": IG_URL}

    def test_all_options(self):
        args = build_parser().parse_args([
            PATIENT_JSON,
            "--content-type", "application/fhir+json",
            "--profile", "http://example.org/profile",
            "--locale", "sv",
            "--domain", "test-domain",
            "--validation-type", "basic",
        ])

        assert build_input(args) == {
            "contentToValidate": PATIENT_JSON,
            "contentType": "application/fhir+json",
            "profile": "http://example.org/profile",
            "locale": "sv",
            "domain": "test-domain",
            "validationType": "basic",
        }

    def test_stdin_is_read_as_bytes(self):
        args = build_parser().parse_args(["--stdin"])
        data = build_input(args, stdin=io.BytesIO(PATIENT_JSON.encode("utf-8")))

        assert data == {"contentToValidate": PATIENT_JSON.encode("utf-8")}


class TestMain:
    """Tests for the CLI entry point."""

    def test_success_text_output(self, recording_parser):
        code, output = run([PATIENT_JSON, "--ig", IG_URL])

        assert code == 0
        assert output.splitlines() == [
            "Result: SUCCESS",
            "INFO: JSON successfully parsed as valid FHIR resource @ contentToValidate:0:0",
            f"INFO: Implementation Guide specified: {IG_URL} @ ig:0:0",
        ]

    def test_failure_json_output(self, recording_parser):
        code, output = run([MALFORMED_JSON, "--format", "json"])

        assert code == 1
        report = json.loads(output)
        assert report["result"] == "FAILURE"
        assert report["counters"]["errors"] == 1
        assert report["findings"][0]["location"] == "contentToValidate:0:0"

    def test_rejected_content_type(self, recording_parser):
        code, output = run([PATIENT_JSON, "--content-type", "text/plain"])

        assert code == 1
        assert "contentType:0:0" in output
        assert recording_parser.calls == []

    def test_base64_argument(self, recording_parser):
        encoded = base64.b64encode(PATIENT_JSON.encode("utf-8")).decode("ascii")

        code, _ = run([encoded])

        assert code == 0
        assert recording_parser.calls == [PATIENT_JSON]

    def test_stdin(self, recording_parser):
        code, _ = run(["--stdin"], stdin=io.BytesIO(PATIENT_JSON.encode("utf-8")))

        assert code == 0
        assert recording_parser.calls == [PATIENT_JSON]

    def test_content_and_stdin_are_exclusive(self, recording_parser):
        code, output = run([PATIENT_JSON, "--stdin"], stdin=io.BytesIO(b"{}"))

        assert code == 2
        assert output == ""

    def test_missing_content(self, recording_parser):
        code, _ = run([])
        assert code == 2

    def test_invalid_configuration(self, monkeypatch):
        monkeypatch.setenv("FHIR_VALIDATOR_LOG_LEVEL", "LOUD")

        code, output = run([PATIENT_JSON])

        assert code == 2
        assert output == ""

"""
Common test fixtures for the FHIR JSON validator tests.
"""

import json
from pathlib import Path

import pytest

from fhir_json_validator.exceptions import ParseError
from fhir_json_validator.infrastructure.messages import MessageFormatter
from fhir_json_validator.utils.config import reset_settings

# Fixture paths
FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_PATIENT_PATH = FIXTURES_DIR / "sample_patient.json"

PATIENT_JSON = '{"resourceType":"Patient","id":"example"}'
FULL_PATIENT_JSON = (
    '{"resourceType":"Patient","id":"example","name":[{"family":"Doe","given":["John"]}],'
    '"gender":"male","birthDate":"1980-01-01"}'
)
MALFORMED_JSON = (
    '{"resourceType":"Patient","id":"example",'
    '"invalidField":{"nested":"value""missingComma":true}}'
)
IG_URL = "http://hl7.org/fhir/us/core/ImplementationGuide/hl7.fhir.us.core"
PROFILE_URL = "http://hl7.org/fhir/us/core/StructureDefinition/us-core-patient"


class RecordingParser:
    """Stand-in resource parser that records every text it receives.

    Accepts any JSON object with a ``resourceType``; everything else fails
    with a `ParseError` carrying the decoder diagnostic.
    """

    def __init__(self):
        self.calls = []

    def parse(self, text):
        self.calls.append(text)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e}") from e
        if not isinstance(data, dict) or "resourceType" not in data:
            raise ParseError("Resource missing required 'resourceType' field")
        return data


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep settings independent of the developer's environment."""
    for name in (
        "FHIR_VALIDATOR_CONFIG",
        "FHIR_VALIDATOR_DEFAULT_LOCALE",
        "FHIR_VALIDATOR_FHIR_RELEASE",
        "FHIR_VALIDATOR_LOG_LEVEL",
        "FHIR_VALIDATOR_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def parser():
    return RecordingParser()


@pytest.fixture
def messages():
    return MessageFormatter()


@pytest.fixture
def sample_patient_text():
    return SAMPLE_PATIENT_PATH.read_text(encoding="utf-8")


@pytest.fixture
def patient_file(tmp_path):
    """Write the full patient resource to a temporary .json file."""
    path = tmp_path / "patient.json"
    path.write_text(FULL_PATIENT_JSON, encoding="utf-8")
    return path

"""
End-to-end validation tests using the real fhir.resources parser.
"""

import base64

import pytest

from conftest import FULL_PATIENT_JSON, IG_URL, MALFORMED_JSON, PATIENT_JSON, PROFILE_URL, SAMPLE_PATIENT_PATH
from fhir_json_validator import FhirJsonValidator, FhirResourceParser, MessageFormatter, TestResult


@pytest.fixture(scope="module")
def validator():
    return FhirJsonValidator(parser=FhirResourceParser(), messages=MessageFormatter())


class TestEndToEnd:
    """Validation of realistic inputs from the test bed."""

    def test_file_path(self, validator):
        report = validator.validate({"contentToValidate": str(SAMPLE_PATIENT_PATH)})
        assert report.result is TestResult.SUCCESS

    def test_raw_json(self, validator):
        report = validator.validate({
            "contentToValidate": PATIENT_JSON,
            "contentType": "application/fhir+json",
        })

        assert report.result is TestResult.SUCCESS
        assert len(report.findings) == 1

    def test_base64(self, validator):
        encoded = base64.b64encode(FULL_PATIENT_JSON.encode("utf-8")).decode("ascii")

        report = validator.validate({"contentToValidate": encoded})

        assert report.result is TestResult.SUCCESS

    def test_bytes(self, validator):
        report = validator.validate({"contentToValidate": SAMPLE_PATIENT_PATH.read_bytes()})
        assert report.result is TestResult.SUCCESS

    def test_with_ig_and_profile(self, validator, patient_file):
        report = validator.validate({
            "contentToValidate": str(patient_file),
            "contentType": "application/fhir+json",
            "ig": IG_URL,
            "profile": PROFILE_URL,
        })

        assert report.result is TestResult.SUCCESS
        messages = [f.message for f in report.findings]
        assert any("Implementation Guide specified" in m for m in messages)
        assert any("Profile specified" in m for m in messages)

    def test_invalid_content_type(self, validator, patient_file):
        report = validator.validate({
            "contentToValidate": str(patient_file),
            "contentType": "text/plain",
        })
        assert report.result is TestResult.FAILURE

    def test_invalid_json(self, validator, tmp_path):
        path = tmp_path / "invalid-json-test.json"
        path.write_text(MALFORMED_JSON, encoding="utf-8")

        report = validator.validate({
            "contentToValidate": str(path),
            "contentType": "application/fhir+json",
        })

        assert report.result is TestResult.FAILURE
        assert len(report.findings) == 1
        assert report.findings[0].message.startswith("Failed to parse JSON as FHIR resource")

    def test_invalid_resource(self, validator):
        report = validator.validate({
            "contentToValidate": '{"resourceType": "Patient", "birthDate": "not-a-date"}',
        })
        assert report.result is TestResult.FAILURE

    def test_standard_test_bed_inputs(self, validator, patient_file, tmp_path):
        report = validator.validate({
            "contentToValidate": str(patient_file),
            "domain": "test-domain",
            "validationType": "test-validation",
            "tempFolder": str(tmp_path),
            "locale": "en",
            "contentType": "application/fhir+json",
        })
        assert report.result is TestResult.SUCCESS

    def test_missing_file(self, validator, tmp_path):
        report = validator.validate({"contentToValidate": str(tmp_path / "missing.json")})

        assert report.result is TestResult.FAILURE
        assert report.findings[0].location == "contentToValidate:0:0"

"""
FHIR JSON Validator Package.

This package validates FHIR JSON resources supplied as raw bytes, base64,
a file path or literal text, and reports the outcome as a pass/fail report
with itemized findings.
"""

# Package version
__version__ = "1.0.0"

from fhir_json_validator.utils.logging import configure_logging, get_logger, log_with_context

# ----------------------------------------------------------------------
# Public API re-exports
# ----------------------------------------------------------------------
from fhir_json_validator.domain.validation import (
    ContentResolver,
    FhirJsonValidator,
    Finding,
    Severity,
    TestResult,
    ValidateRequest,
    ValidationReport,
    ValidationRequest,
    ValidationResponse,
)
from fhir_json_validator.exceptions import (
    ClassificationError,
    ContentTypeRejected,
    FhirValidatorError,
    ParseError,
)
from fhir_json_validator.infrastructure import FhirResourceParser, MessageFormatter

__all__ = [
    "__version__",
    # Validation
    "FhirJsonValidator",
    "ContentResolver",
    "ValidationRequest",
    "ValidationReport",
    "ValidateRequest",
    "ValidationResponse",
    "Finding",
    "Severity",
    "TestResult",
    # Collaborators
    "FhirResourceParser",
    "MessageFormatter",
    # Errors
    "FhirValidatorError",
    "ContentTypeRejected",
    "ClassificationError",
    "ParseError",
    # Logging
    "configure_logging",
    "get_logger",
    "log_with_context",
]

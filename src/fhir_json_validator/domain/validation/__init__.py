"""
Validation modules for the FHIR JSON validator.

This package provides content resolution, the content-type gate and the
orchestrator that turns a request into a validation report.
"""

from .content import ContentResolver, RawBytes, Text, to_content
from .content_type import accept, effective_content_type
from .model import (
    Finding,
    ReportBuilder,
    Severity,
    TestResult,
    ValidateRequest,
    ValidationReport,
    ValidationRequest,
    ValidationResponse,
)
from .validator import FhirJsonValidator

__all__ = [
    "ContentResolver",
    "RawBytes",
    "Text",
    "to_content",
    "accept",
    "effective_content_type",
    "Finding",
    "ReportBuilder",
    "Severity",
    "TestResult",
    "ValidateRequest",
    "ValidationReport",
    "ValidationRequest",
    "ValidationResponse",
    "FhirJsonValidator",
]

"""
Exceptions raised inside the validation pipeline.

None of these escape `FhirJsonValidator.validate`; each one is turned into an
ERROR finding on the returned report.
"""

from typing import Optional


class FhirValidatorError(Exception):
    """Base exception for validator errors."""
    pass


class ContentTypeRejected(FhirValidatorError):
    """Declared content type is not a FHIR JSON media type."""

    def __init__(self, content_type: str):
        super().__init__(f"Unsupported content type: {content_type}")
        self.content_type = content_type


class ClassificationError(FhirValidatorError):
    """Payload is missing, undecodable, or references an unreadable file."""
    pass


class ParseError(FhirValidatorError):
    """The resource parser rejected the text as structurally invalid."""

    def __init__(self, diagnostic: str, resource_type: Optional[str] = None):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic
        self.resource_type = resource_type

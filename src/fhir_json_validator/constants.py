"""Shared constants for the FHIR JSON validator.

Input parameter names follow the validation-service conventions of the
test bed that calls this adapter.
"""
from __future__ import annotations

__all__ = [
    "INPUT_CONTENT_TO_VALIDATE",
    "INPUT_CONTENT_TYPE",
    "INPUT_IG",
    "INPUT_PROFILE",
    "INPUT_DOMAIN",
    "INPUT_VALIDATION_TYPE",
    "INPUT_LOCALE",
    "INPUT_TEMP_FOLDER",
    "DEFAULT_CONTENT_TYPE",
    "SUPPORTED_CONTENT_TYPE_PREFIX",
    "location_of",
]

INPUT_CONTENT_TO_VALIDATE = "contentToValidate"
INPUT_CONTENT_TYPE = "contentType"
INPUT_IG = "ig"
INPUT_PROFILE = "profile"
INPUT_DOMAIN = "domain"
INPUT_VALIDATION_TYPE = "validationType"
INPUT_LOCALE = "locale"
INPUT_TEMP_FOLDER = "tempFolder"

DEFAULT_CONTENT_TYPE = "application/fhir+json"
SUPPORTED_CONTENT_TYPE_PREFIX = "application/fhir+json"


def location_of(parameter: str) -> str:
    """Return the report location for an input parameter.

    No line or column tracking exists, so both coordinates are always 0.
    """
    return f"{parameter}:0:0"

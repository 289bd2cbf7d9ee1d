"""Content-type gate, evaluated before any content is decoded or read."""

from typing import Optional

from fhir_json_validator.constants import DEFAULT_CONTENT_TYPE, SUPPORTED_CONTENT_TYPE_PREFIX
from fhir_json_validator.exceptions import ContentTypeRejected


def effective_content_type(content_type: Optional[str]) -> str:
    """Return the declared content type, or the FHIR JSON default when absent."""
    return DEFAULT_CONTENT_TYPE if content_type is None else content_type


def accept(content_type: Optional[str]) -> bool:
    """Return True if the content type is a FHIR JSON media type.

    Only a prefix match is required, so parameters such as
    `application/fhir+json; charset=utf-8` are accepted.
    """
    return effective_content_type(content_type).startswith(SUPPORTED_CONTENT_TYPE_PREFIX)


def require_supported(content_type: Optional[str]) -> str:
    """Return the effective content type or raise `ContentTypeRejected`."""
    effective = effective_content_type(content_type)
    if not accept(effective):
        raise ContentTypeRejected(effective)
    return effective

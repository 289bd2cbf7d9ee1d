"""Adapters for the resource parser and message catalogs."""

from fhir_json_validator.infrastructure.fhir_parser import FhirResourceParser, ResourceParser
from fhir_json_validator.infrastructure.messages import MessageFormatter

__all__ = [
    "FhirResourceParser",
    "ResourceParser",
    "MessageFormatter",
]

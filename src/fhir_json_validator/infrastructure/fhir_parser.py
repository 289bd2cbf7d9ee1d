"""
FHIR resource parsing using the fhir.resources library.

The validator only needs to know whether a text is a well-formed FHIR
resource. `FhirResourceParser` decodes the JSON, picks the fhir.resources
model class named by ``resourceType`` and lets pydantic validate the data.
Any other object with a compatible ``parse`` method can be used instead.
"""

import importlib
import json
import re
from typing import Any, Dict, List, Protocol, Type

from pydantic import BaseModel, ValidationError

from fhir_json_validator.exceptions import ParseError
from fhir_json_validator.utils.logging import get_logger

logger = get_logger(__name__)

# fhir.resources ships R5 at the package root and older releases as
# subpackages, each with its own get_fhir_model_class lookup
FHIR_RELEASE_PACKAGES = {
    "R5": "fhir.resources",
    "R4B": "fhir.resources.R4B",
    "STU3": "fhir.resources.STU3",
}

_RESOURCE_TYPE_PATTERN = re.compile(r"^[A-Z][A-Za-z]+$")
MAX_REPORTED_ERRORS = 5


class ResourceParser(Protocol):
    """Anything that accepts FHIR JSON text or raises `ParseError`."""

    def parse(self, text: str) -> Any:
        ...


def _format_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Summarize pydantic errors as a single line."""
    parts = []
    for error in errors[:MAX_REPORTED_ERRORS]:
        field_path = ".".join(str(loc) for loc in error.get("loc", ())) or "__root__"
        parts.append(f"{field_path}: {error.get('msg')}")

    summary = "; ".join(parts)
    if len(errors) > MAX_REPORTED_ERRORS:
        summary += f" (+{len(errors) - MAX_REPORTED_ERRORS} more)"
    return summary


class FhirResourceParser:
    """Parser backed by the fhir.resources models of one FHIR release."""

    def __init__(self, release: str = "R4B"):
        """Initialize a FHIR resource parser.

        Args:
            release: FHIR release to parse against (R5, R4B or STU3).

        Raises:
            ValueError: If the release is not supported.
        """
        if release not in FHIR_RELEASE_PACKAGES:
            raise ValueError(
                f"Unsupported FHIR release: {release}. "
                f"Expected one of {sorted(FHIR_RELEASE_PACKAGES)}"
            )
        self.release = release
        self._get_model_class = importlib.import_module(FHIR_RELEASE_PACKAGES[release]).get_fhir_model_class

    def get_resource_model(self, resource_type: str) -> Type[BaseModel]:
        """Get the fhir.resources model class for a resource type.

        Args:
            resource_type: FHIR resource type (e.g. "Patient").

        Returns:
            The model class.

        Raises:
            ParseError: If no model exists for the resource type.
        """
        if not _RESOURCE_TYPE_PATTERN.match(resource_type):
            raise ParseError(f"Invalid resourceType: {resource_type}", resource_type)

        try:
            model_class = self._get_model_class(resource_type)
        except (KeyError, ValueError, ImportError, AttributeError) as e:
            raise ParseError(
                f"Unknown resource type for FHIR {self.release}: {resource_type}",
                resource_type,
            ) from e

        if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
            raise ParseError(
                f"Unknown resource type for FHIR {self.release}: {resource_type}",
                resource_type,
            )
        return model_class

    def parse(self, text: str) -> BaseModel:
        """Parse FHIR JSON text into a fhir.resources model.

        Args:
            text: The resource as JSON text.

        Returns:
            The parsed resource model.

        Raises:
            ParseError: If the text is not JSON, not a resource object, or
                fails model validation.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

        resource_type = data.get("resourceType")
        if not isinstance(resource_type, str) or not resource_type:
            raise ParseError("Resource missing required 'resourceType' field")

        model_class = self.get_resource_model(resource_type)

        try:
            resource = model_class.model_validate(data)
        except ValidationError as e:
            raise ParseError(_format_validation_errors(e.errors()), resource_type) from e

        logger.debug("Parsed %s resource", resource_type)
        return resource

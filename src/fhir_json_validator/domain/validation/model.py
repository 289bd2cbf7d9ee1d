"""
Report and request models for FHIR JSON validation.

A validation call reads a `ValidationRequest` and produces a
`ValidationReport`: one overall result plus an ordered list of findings.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fhir_json_validator.constants import (
    INPUT_CONTENT_TO_VALIDATE,
    INPUT_CONTENT_TYPE,
    INPUT_DOMAIN,
    INPUT_IG,
    INPUT_LOCALE,
    INPUT_PROFILE,
    INPUT_TEMP_FOLDER,
    INPUT_VALIDATION_TYPE,
)


class Severity(str, enum.Enum):
    """Severity of a single finding."""

    INFO = "INFO"
    ERROR = "ERROR"


class TestResult(str, enum.Enum):
    """Overall outcome of a validation call."""

    __test__ = False  # not a pytest test class

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class Finding:
    """One reported fact about the validated input."""

    severity: Severity
    message: str
    location: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary representation of the finding.
        """
        return {
            "severity": self.severity.value,
            "message": self.message,
            "location": self.location,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Overall result plus the ordered findings of one validation call."""

    result: TestResult
    findings: Tuple[Finding, ...] = ()

    @property
    def errors(self) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.ERROR)

    @property
    def infos(self) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.INFO)

    @property
    def counters(self) -> Dict[str, int]:
        """Finding counts in the shape of a test assertion report."""
        return {
            "errors": len(self.errors),
            "warnings": 0,
            "infos": len(self.infos),
        }

    @property
    def succeeded(self) -> bool:
        return self.result is TestResult.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            JSON-ready dictionary with result, counters and findings.
        """
        return {
            "result": self.result.value,
            "counters": self.counters,
            "findings": [finding.to_dict() for finding in self.findings],
        }


class ReportBuilder:
    """Collects findings during a single validation call.

    The result is set exactly once, by `complete`, after the last finding has
    been appended.
    """

    def __init__(self):
        self._findings: List[Finding] = []
        self._report: Optional[ValidationReport] = None

    def add(self, severity: Severity, message: str, location: str) -> "ReportBuilder":
        if self._report is not None:
            raise RuntimeError("Report already completed")
        self._findings.append(Finding(severity=severity, message=message, location=location))
        return self

    def info(self, message: str, location: str) -> "ReportBuilder":
        return self.add(Severity.INFO, message, location)

    def error(self, message: str, location: str) -> "ReportBuilder":
        return self.add(Severity.ERROR, message, location)

    @property
    def has_errors(self) -> bool:
        return any(f.severity is Severity.ERROR for f in self._findings)

    def complete(self, result: TestResult) -> ValidationReport:
        """Set the overall result and freeze the report.

        Args:
            result: Overall outcome of the call.

        Returns:
            The immutable report.

        Raises:
            RuntimeError: If the report was already completed, or if the result
                contradicts the findings (FAILURE exactly when an ERROR exists).
        """
        if self._report is not None:
            raise RuntimeError("Report already completed")
        if (result is TestResult.FAILURE) != self.has_errors:
            raise RuntimeError(f"Result {result.value} is inconsistent with the recorded findings")
        self._report = ValidationReport(result=result, findings=tuple(self._findings))
        return self._report


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class ValidationRequest:
    """Typed view over the inbound parameter mapping.

    Absent parameters stay `None`; they are never replaced by empty strings.
    """

    content_to_validate: Any = None
    content_type: Optional[str] = None
    ig: Optional[str] = None
    profile: Optional[str] = None
    domain: Optional[str] = None
    validation_type: Optional[str] = None
    locale: Optional[str] = None
    temp_folder: Optional[str] = None

    @classmethod
    def from_input(cls, data: Mapping[str, Any]) -> "ValidationRequest":
        """Build a request from an inbound parameter mapping.

        Args:
            data: Parameter name to value. Unknown names are ignored.

        Returns:
            The parsed request.

        Raises:
            TypeError: If `data` is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Validation input must be a mapping, got {type(data).__name__}"
            )

        return cls(
            content_to_validate=data.get(INPUT_CONTENT_TO_VALIDATE),
            content_type=_optional_text(data.get(INPUT_CONTENT_TYPE)),
            ig=_optional_text(data.get(INPUT_IG)),
            profile=_optional_text(data.get(INPUT_PROFILE)),
            domain=_optional_text(data.get(INPUT_DOMAIN)),
            validation_type=_optional_text(data.get(INPUT_VALIDATION_TYPE)),
            locale=_optional_text(data.get(INPUT_LOCALE)),
            temp_folder=_optional_text(data.get(INPUT_TEMP_FOLDER)),
        )

    @property
    def has_ig(self) -> bool:
        return not _is_blank(self.ig)

    @property
    def has_profile(self) -> bool:
        return not _is_blank(self.profile)


@dataclass
class ValidateRequest:
    """Envelope carrying the input parameters of a validation call."""

    input: Optional[Mapping[str, Any]] = None

    def get_input(self) -> Mapping[str, Any]:
        return {} if self.input is None else self.input


@dataclass
class ValidationResponse:
    """Envelope carrying the report back to the caller."""

    report: ValidationReport

"""
FHIR JSON validation orchestrator.

`FhirJsonValidator.validate` runs one request through the content-type gate,
content resolution and the resource parser, and always returns a report:
every failure becomes a single ERROR finding with result FAILURE.
"""

from typing import Any, Mapping, Optional, Union

from fhir_json_validator.constants import (
    INPUT_CONTENT_TO_VALIDATE,
    INPUT_CONTENT_TYPE,
    INPUT_IG,
    INPUT_PROFILE,
    location_of,
)
from fhir_json_validator.domain.validation.content import ContentResolver
from fhir_json_validator.domain.validation.content_type import require_supported
from fhir_json_validator.domain.validation.model import (
    ReportBuilder,
    TestResult,
    ValidateRequest,
    ValidationReport,
    ValidationRequest,
    ValidationResponse,
)
from fhir_json_validator.exceptions import ClassificationError, ContentTypeRejected, ParseError
from fhir_json_validator.infrastructure.fhir_parser import FhirResourceParser, ResourceParser
from fhir_json_validator.infrastructure.messages import (
    MSG_CONTENT_TYPE,
    MSG_IG,
    MSG_PARSE,
    MSG_PROCESSING,
    MSG_PROFILE,
    MSG_SUCCESS,
    MessageFormatter,
)
from fhir_json_validator.utils.config import ValidatorSettings, get_settings
from fhir_json_validator.utils.logging import LogDuration, get_logger, log_with_context

logger = get_logger(__name__)

CONTENT_LOCATION = location_of(INPUT_CONTENT_TO_VALIDATE)
CONTENT_TYPE_LOCATION = location_of(INPUT_CONTENT_TYPE)
IG_LOCATION = location_of(INPUT_IG)
PROFILE_LOCATION = location_of(INPUT_PROFILE)

_FALLBACK_MESSAGES = MessageFormatter()


class FhirJsonValidator:
    """Validates FHIR JSON content and reports the outcome."""

    def __init__(
        self,
        parser: Optional[ResourceParser] = None,
        messages: Optional[MessageFormatter] = None,
        resolver: Optional[ContentResolver] = None,
        settings: Optional[ValidatorSettings] = None,
    ):
        """Initialize a FHIR JSON validator.

        Args:
            parser: Resource parser. Defaults to a fhir.resources parser for
                the configured FHIR release.
            messages: Message formatter. Defaults to the packaged catalogs
                with the configured default locale.
            resolver: Content resolver.
            settings: Settings used to build the defaults. Loaded from the
                environment when omitted.
        """
        if parser is None or messages is None:
            settings = settings or get_settings()
        self.parser = parser if parser is not None else FhirResourceParser(release=settings.fhir_release)
        self.messages = messages if messages is not None else MessageFormatter(settings.default_locale)
        self.resolver = resolver or ContentResolver()

    def validate(self, request: Union[ValidationRequest, Mapping[str, Any]]) -> ValidationReport:
        """Validate one request.

        Args:
            request: A `ValidationRequest` or the inbound parameter mapping.

        Returns:
            The validation report.

        Raises:
            TypeError: If the request is neither a `ValidationRequest` nor a
                mapping.
        """
        if not isinstance(request, ValidationRequest):
            request = ValidationRequest.from_input(request)

        with LogDuration() as duration:
            report = self._run(request)

        log_with_context(
            logger,
            "info",
            "Validation completed",
            result=report.result.value,
            findings=len(report.findings),
            content_type=request.content_type,
            domain=request.domain,
            validation_type=request.validation_type,
            elapsed_ms=round(duration.elapsed_ms, 3),
        )
        return report

    def handle(self, request: ValidateRequest) -> ValidationResponse:
        """Validate the input of a request envelope."""
        return ValidationResponse(report=self.validate(request.get_input()))

    def _run(self, request: ValidationRequest) -> ValidationReport:
        report = ReportBuilder()
        locale = request.locale

        try:
            self._parse(request)
        except ContentTypeRejected as e:
            logger.debug("Rejected content type %s", e.content_type)
            return self._fail(report, locale, MSG_CONTENT_TYPE, e.content_type, CONTENT_TYPE_LOCATION)
        except ClassificationError as e:
            logger.debug("Content could not be resolved: %s", e)
            return self._fail(report, locale, MSG_PROCESSING, str(e), CONTENT_LOCATION)
        except ParseError as e:
            logger.debug("Content rejected by parser: %s", e.diagnostic)
            return self._fail(report, locale, MSG_PARSE, e.diagnostic, CONTENT_LOCATION)
        except Exception as e:
            logger.error("Unexpected error during validation", exc_info=True)
            return self._fail(report, locale, MSG_PROCESSING, str(e), CONTENT_LOCATION)

        report.info(self._message(locale, MSG_SUCCESS), CONTENT_LOCATION)
        if request.has_ig:
            report.info(self._message(locale, MSG_IG, request.ig), IG_LOCATION)
        if request.has_profile:
            report.info(self._message(locale, MSG_PROFILE, request.profile), PROFILE_LOCATION)

        return report.complete(TestResult.SUCCESS)

    def _parse(self, request: ValidationRequest) -> Any:
        """Gate, resolve and parse; raises on the first failing step."""
        content_type = require_supported(request.content_type)
        logger.debug("Accepted content type %s", content_type)

        text = self.resolver.resolve(request.content_to_validate)
        return self.parser.parse(text)

    def _fail(self, report: ReportBuilder, locale: Optional[str], key: str, detail: str, location: str) -> ValidationReport:
        report.error(self._message(locale, key, detail), location)
        return report.complete(TestResult.FAILURE)

    def _message(self, locale: Optional[str], key: str, *args: Any) -> str:
        try:
            return self.messages.format(locale, key, *args)
        except Exception:
            logger.error("Message formatter failed for %s", key, exc_info=True)
            return _FALLBACK_MESSAGES.format(None, key, *args)

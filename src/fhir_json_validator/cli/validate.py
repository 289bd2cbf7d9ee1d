"""
Command-line interface for validating FHIR JSON content.

The content argument is passed through unchanged, so it is classified the
same way as the ``contentToValidate`` parameter of a validation request:
base64, a file path, or literal JSON.
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from fhir_json_validator.constants import (
    INPUT_CONTENT_TO_VALIDATE,
    INPUT_CONTENT_TYPE,
    INPUT_DOMAIN,
    INPUT_IG,
    INPUT_LOCALE,
    INPUT_PROFILE,
    INPUT_VALIDATION_TYPE,
)
from fhir_json_validator.domain.validation.model import ValidationReport
from fhir_json_validator.domain.validation.validator import FhirJsonValidator
from fhir_json_validator.utils.config import get_settings
from fhir_json_validator.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fhir-json-validate",
        description="Validate a FHIR JSON resource given as base64, a file path or literal JSON",
    )

    parser.add_argument(
        "content",
        nargs="?",
        help="Content to validate (base64, file path or JSON text)",
    )

    parser.add_argument(
        "--stdin",
        help="Read the content as raw bytes from standard input",
        action="store_true",
    )

    parser.add_argument("--content-type", "-t", help="MIME type of the content")
    parser.add_argument("--ig", help="Implementation Guide URL")
    parser.add_argument("--profile", "-p", help="Profile URL")
    parser.add_argument("--locale", "-l", help="Locale for report messages")
    parser.add_argument("--domain", help="Validation domain")
    parser.add_argument("--validation-type", help="Validation type")

    parser.add_argument(
        "--format", "-f",
        help="Output format",
        choices=["text", "json"],
        default="text",
    )

    parser.add_argument(
        "--verbose", "-v",
        help="Enable verbose logging",
        action="store_true",
    )

    return parser


def build_input(args, stdin=None):
    """Build the validation input mapping from parsed arguments.

    Only options that were given are included, so absent parameters stay
    absent.
    """
    if args.stdin:
        stream = stdin if stdin is not None else sys.stdin.buffer
        content = stream.read()
    else:
        content = args.content

    data = {INPUT_CONTENT_TO_VALIDATE: content}
    optional = {
        INPUT_CONTENT_TYPE: args.content_type,
        INPUT_IG: args.ig,
        INPUT_PROFILE: args.profile,
        INPUT_LOCALE: args.locale,
        INPUT_DOMAIN: args.domain,
        INPUT_VALIDATION_TYPE: args.validation_type,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    return data


def render_report(report: ValidationReport, output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    lines = [f"Result: {report.result.value}"]
    for finding in report.findings:
        lines.append(f"{finding.severity.value}: {finding.message} @ {finding.location}")
    return "\n".join(lines)


def main(argv=None, stdin=None, stdout=None):
    """Main entry point for the validation CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    if args.stdin == (args.content is not None):
        parser.print_usage(sys.stderr)
        print("error: give either CONTENT or --stdin", file=sys.stderr)
        return EXIT_USAGE

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(
        level=logging.DEBUG if args.verbose else settings.log_level,
        json_format=settings.log_json,
    )

    try:
        validator = FhirJsonValidator(settings=settings)
    except ValueError as e:
        logger.error("Validator could not be created", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    report = validator.validate(build_input(args, stdin=stdin))
    print(render_report(report, args.format), file=out)

    return EXIT_SUCCESS if report.succeeded else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())

"""
Utility modules for the FHIR JSON validator.

This package contains logging and configuration helpers used throughout the
validator codebase.
"""

from fhir_json_validator.utils.logging import (
    configure_logging,
    get_logger,
    log_with_context
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_with_context"
]

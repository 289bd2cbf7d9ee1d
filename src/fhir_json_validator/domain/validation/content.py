"""
Content resolution for FHIR JSON validation.

The `contentToValidate` parameter is ambiguous: it may be raw bytes, a base64
string, a path to a JSON file, or the JSON text itself. This module turns it
into the text handed to the resource parser.

Strings are classified in a fixed order, first match wins:

1. base64 (strict alphabet) - decoded and read as UTF-8
2. contains ``/`` or ``\\``, or ends with ``.json`` - read as a file path
3. anything else - used verbatim

Known limitation: literal text made only of base64-alphabet characters is
decoded as base64. The order is kept for compatibility with existing callers.
"""

import base64
import binascii
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from fhir_json_validator.exceptions import ClassificationError
from fhir_json_validator.utils.logging import get_logger

logger = get_logger(__name__)

TEXT_ENCODING = "utf-8"
PATH_SEPARATORS = ("/", "\\")
JSON_FILE_SUFFIX = ".json"


@dataclass(frozen=True)
class RawBytes:
    """Payload supplied as bytes."""

    data: bytes


@dataclass(frozen=True)
class Text:
    """Payload supplied as a string."""

    value: str


Content = Union[RawBytes, Text]


def to_content(value: Any) -> Content:
    """Tag a raw payload value as `RawBytes` or `Text`.

    Args:
        value: The `contentToValidate` value as received.

    Returns:
        The tagged payload.

    Raises:
        ClassificationError: If the value is missing or of an unsupported type.
    """
    if value is None:
        raise ClassificationError("missing content")
    if isinstance(value, (RawBytes, Text)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawBytes(bytes(value))
    if isinstance(value, str):
        return Text(value)
    raise ClassificationError(
        f"Unsupported type for contentToValidate: {type(value).__name__}"
    )


def _decode_text(data: bytes) -> str:
    return data.decode(TEXT_ENCODING, errors="replace")


def _decode_base64(text: str) -> bytes:
    # Trailing padding may be omitted; when present it must complete the
    # final 4-character unit with at most two "=" and nothing after it.
    if "=" in text:
        data = text.rstrip("=")
        if len(text) % 4 or len(text) - len(data) > 2 or "=" in data:
            raise binascii.Error("Incorrect base64 padding")
    else:
        text += "=" * (-len(text) % 4)
    return base64.b64decode(text, validate=True)


def looks_like_path(text: str) -> bool:
    """Return True if a non-base64 string should be read as a file path."""
    return any(sep in text for sep in PATH_SEPARATORS) or text.endswith(JSON_FILE_SUFFIX)


def read_file(path: Union[str, Path]) -> str:
    """Read a referenced file as UTF-8 text.

    Raises:
        ClassificationError: If the file cannot be read, chained to the cause.
    """
    try:
        with open(path, "rb") as fh:
            return _decode_text(fh.read())
    except OSError as e:
        raise ClassificationError(f"Unable to read file {path}: {e}") from e


class ContentResolver:
    """Resolves `contentToValidate` into the text to validate.

    Stateless; a single instance can be shared between requests.
    """

    def resolve(self, value: Any) -> str:
        """Resolve a payload into text.

        Args:
            value: Raw payload or an already tagged `Content`.

        Returns:
            The text to hand to the resource parser.

        Raises:
            ClassificationError: If the payload is missing, of an unsupported
                type, or references a file that cannot be read.
        """
        content = to_content(value)

        if isinstance(content, RawBytes):
            logger.debug("Resolved content from raw bytes")
            return _decode_text(content.data)

        return self.resolve_text(content.value)

    def resolve_text(self, text: str) -> str:
        try:
            decoded = _decode_base64(text)
        except (binascii.Error, ValueError):
            pass
        else:
            logger.debug("Resolved content from base64")
            return _decode_text(decoded)

        if looks_like_path(text):
            logger.debug("Resolved content from file path")
            return self.read_file(text)

        logger.debug("Resolved content as literal text")
        return text

    def read_file(self, path: str) -> str:
        return read_file(path)

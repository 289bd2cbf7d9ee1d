"""
Localized report messages.

Message catalogs are YAML files in the package's ``messages`` directory, one
per locale tag. A lookup tries the requested locale, then its language, then
the default locale, then the built-in English table, so formatting a report
message never fails because a catalog is missing.
"""

import re
from importlib import resources
from typing import Any, Dict, List, Optional

import yaml

from fhir_json_validator.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOCALE = "en"
CATALOG_SUFFIX = ".yaml"
_LOCALE_PATTERN = re.compile(r"^[a-z]{2,8}(-[a-z0-9]{1,8})*$")

MSG_SUCCESS = "validation.success"
MSG_IG = "validation.ig"
MSG_PROFILE = "validation.profile"
MSG_CONTENT_TYPE = "error.content.type"
MSG_PROCESSING = "error.content.processing"
MSG_PARSE = "error.parse"

BUILTIN_MESSAGES: Dict[str, str] = {
    MSG_SUCCESS: "JSON successfully parsed as valid FHIR resource",
    MSG_IG: "Implementation Guide specified: {0}",
    MSG_PROFILE: "Profile specified: {0}",
    MSG_CONTENT_TYPE: "Unsupported content type: {0}. Expected application/fhir+json",
    MSG_PROCESSING: "Content processing error: {0}",
    MSG_PARSE: "Failed to parse JSON as FHIR resource: {0}",
}


def normalize_locale(locale: Optional[str]) -> Optional[str]:
    """Normalize a locale tag, e.g. ``sv_SE`` -> ``sv-se``.

    Returns None for blank or malformed tags.
    """
    if locale is None:
        return None
    tag = locale.strip().replace("_", "-").lower()
    return tag if _LOCALE_PATTERN.match(tag) else None


def candidate_locales(locale: Optional[str], default_locale: str) -> List[str]:
    """Return the catalogs to consult for a locale, most specific first."""
    candidates = []
    tag = normalize_locale(locale)
    if tag is not None:
        candidates.append(tag)
        language = tag.split("-", 1)[0]
        if language not in candidates:
            candidates.append(language)

    default_tag = normalize_locale(default_locale) or DEFAULT_LOCALE
    if default_tag not in candidates:
        candidates.append(default_tag)
    return candidates


def load_catalog(locale: str) -> Optional[Dict[str, str]]:
    """Load the packaged catalog for a locale tag.

    Returns:
        Message key to template, or None if no catalog exists for the tag.
    """
    resource = resources.files("fhir_json_validator").joinpath("messages").joinpath(f"{locale}{CATALOG_SUFFIX}")
    if not resource.is_file():
        return None

    try:
        with resource.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Cannot load message catalog {locale}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed message catalog: {locale}")
        return None
    return {str(key): str(value) for key, value in data.items()}


def packaged_locales() -> List[str]:
    """Return the locale tags that have a packaged catalog."""
    directory = resources.files("fhir_json_validator").joinpath("messages")
    return sorted(
        entry.name[: -len(CATALOG_SUFFIX)]
        for entry in directory.iterdir()
        if entry.name.endswith(CATALOG_SUFFIX)
    )


class MessageFormatter:
    """Formats report messages from locale catalogs.

    All catalogs are loaded when the formatter is created and never change
    afterwards, so one instance can be shared between threads.
    """

    def __init__(self, default_locale: str = DEFAULT_LOCALE, catalogs: Optional[Dict[str, Dict[str, str]]] = None):
        """Initialize a message formatter.

        Args:
            default_locale: Locale used when the requested one has no message.
            catalogs: Catalogs by locale tag. These replace packaged catalogs
                with the same tag.
        """
        self.default_locale = normalize_locale(default_locale) or DEFAULT_LOCALE
        self._catalogs: Dict[str, Dict[str, str]] = {}
        for tag in packaged_locales():
            catalog = load_catalog(tag)
            if catalog is not None:
                self._catalogs[tag] = catalog
        for tag, catalog in (catalogs or {}).items():
            normalized = normalize_locale(tag)
            if normalized is not None:
                self._catalogs[normalized] = dict(catalog)

    def catalog(self, locale: str) -> Optional[Dict[str, str]]:
        return self._catalogs.get(locale)

    def template(self, locale: Optional[str], key: str) -> Optional[str]:
        """Find the template for a key, falling back to the default catalogs."""
        for tag in candidate_locales(locale, self.default_locale):
            catalog = self.catalog(tag)
            if catalog is not None and key in catalog:
                return catalog[key]
        return BUILTIN_MESSAGES.get(key)

    def format(self, locale: Optional[str], key: str, *args: Any) -> str:
        """Format a message.

        Args:
            locale: Requested locale tag, or None for the default locale.
            key: Message key.
            *args: Positional placeholder values.

        Returns:
            The formatted message. Never raises; unknown keys and templates
            that cannot be formatted degrade to the default message.
        """
        for template in (self.template(locale, key), BUILTIN_MESSAGES.get(key)):
            if template is None:
                continue
            try:
                return template.format(*args)
            except (IndexError, KeyError, ValueError) as e:
                logger.warning(f"Cannot format message {key}: {e}")

        if args:
            return f"{key}: " + ", ".join(str(arg) for arg in args)
        return key

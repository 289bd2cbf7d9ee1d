"""
Configuration management for the FHIR JSON validator.

Settings come from, in increasing priority: built-in defaults, an optional
YAML file named by ``FHIR_VALIDATOR_CONFIG``, a ``.env`` file, and
``FHIR_VALIDATOR_*`` environment variables.
"""

import os
from typing import Optional, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from fhir_json_validator.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

CONFIG_FILE_ENV = "FHIR_VALIDATOR_CONFIG"
SUPPORTED_FHIR_RELEASES = ("R5", "R4B", "STU3")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidatorSettings(BaseSettings):
    """Runtime settings for the validator."""

    model_config = SettingsConfigDict(
        env_prefix="FHIR_VALIDATOR_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    default_locale: str = Field(default="en", description="Locale used when a request names none")
    fhir_release: str = Field(default="R4B", description="FHIR release resources are parsed against")
    log_level: str = Field(default="INFO", description="Log level for the command-line tool")
    log_json: bool = Field(default=True, description="Emit structured JSON log records")

    @field_validator("fhir_release")
    @classmethod
    def validate_fhir_release(cls, v):
        """Validate FHIR release."""
        if v.upper() not in SUPPORTED_FHIR_RELEASES:
            raise ValueError(f"FHIR release must be one of {list(SUPPORTED_FHIR_RELEASES)}")
        return v.upper()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(LOG_LEVELS)}")
        return v.upper()

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, v):
        if not v.strip():
            raise ValueError("Default locale must not be blank")
        return v.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings, dotenv_settings]

        config_file = os.environ.get(CONFIG_FILE_ENV)
        if config_file:
            if not os.path.exists(config_file):
                logger.warning(f"Config file not found: {config_file}")
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=config_file))

        sources.append(file_secret_settings)
        return tuple(sources)


# Global settings instance
_settings: Optional[ValidatorSettings] = None


def get_settings() -> ValidatorSettings:
    """Return the cached settings, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = ValidatorSettings()
        log_with_context(logger, "debug", "Configuration loaded", fhir_release=_settings.fhir_release)

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None

"""Environment-based settings using pydantic-settings.

All process-wide configuration lives on one MediaInfoSettings object. Build it
once at start-up (or call get_settings() for the cached instance) and pass it
to the resolution entry points.

Usage:
    from mediatracks.settings import get_settings

    settings = get_settings()
    print(settings.path)  # From MEDIAINFO_PATH env var

Environment Variables:
    MEDIAINFO_PATH - mediainfo binary (default: "/usr/local/bin/mediainfo")
    MEDIAINFO_XML_PARSER - Module used to parse XML (default: "xml.etree.ElementTree")
    MEDIAINFO_TIMEOUT - Seconds to wait for a mediainfo run (default: 60)
    MEDIAINFO_HTTP_TIMEOUT - Seconds to wait for the URL HEAD check (default: 10)
    MEDIAINFO_LOG_LEVEL - Logging level for the CLI (default: "INFO")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MEDIAINFO_PATH = "/usr/local/bin/mediainfo"
DEFAULT_XML_PARSER = "xml.etree.ElementTree"


class MediaInfoSettings(BaseSettings):
    """mediainfo location, parser choice and timeouts.

    Reads from MEDIAINFO_* env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAINFO_",
        extra="ignore",
        frozen=True,
    )

    path: str = Field(
        default=DEFAULT_MEDIAINFO_PATH,
        description="mediainfo binary path",
    )
    xml_parser: str = Field(
        default=DEFAULT_XML_PARSER,
        description="Importable module exposing fromstring()",
    )
    timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for each mediainfo run",
    )
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for the URL reachability check",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Fall back to the default location when blank."""
        v = v.strip()
        return v or DEFAULT_MEDIAINFO_PATH

    @field_validator("xml_parser")
    @classmethod
    def validate_xml_parser(cls, v: str) -> str:
        """Fall back to ElementTree when blank."""
        v = v.strip()
        return v or DEFAULT_XML_PARSER

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"MEDIAINFO_LOG_LEVEL must be one of {valid_levels}, got: {v}")
        return upper


@lru_cache(maxsize=1)
def get_settings() -> MediaInfoSettings:
    """Get cached settings.

    The cache is populated on first call from the current environment.
    """
    return MediaInfoSettings()


def clear_settings_cache() -> None:
    """Clear the cached settings.

    Useful for testing to ensure fresh settings are loaded.
    """
    get_settings.cache_clear()


def load_settings_from_file(env_file: Path) -> MediaInfoSettings:
    """Load settings from a specific .env file.

    Args:
        env_file: Path to .env file to load.

    Returns:
        MediaInfoSettings with configuration from the file.
    """
    from dotenv import load_dotenv

    load_dotenv(env_file, override=True)
    logger.debug(f"Loaded environment from: {env_file}")

    clear_settings_cache()
    return get_settings()

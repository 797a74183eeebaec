"""FastFind Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fastfind.config.models.app_settings import AppSettings, LoggingSettings
from fastfind.config.models.cache_settings import CacheSettings
from fastfind.config.models.search_settings import (
    GeocoderSettings,
    RegistrySettings,
    SearchSettings,
    StoreSettings,
)
from fastfind.shared.errors import ErrorCode, create_config_error

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade over every configuration domain.

    Environment variables use the FASTFIND_ prefix with "__" between
    nesting levels, e.g. ``FASTFIND_CACHE__BACKEND=redis``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FASTFIND_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; environment variables fill the gaps.

        Raises:
            ApplicationError: If the file is missing or is not valid TOML
            pydantic.ValidationError: If a value is invalid
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise create_config_error(
                f"Configuration file not found: {file_path}",
                config_key=str(file_path),
                code=ErrorCode.CONFIG_MISSING,
            )

        try:
            raw_config = toml.load(file_path)
        except (toml.TomlDecodeError, OSError) as e:
            raise create_config_error(
                f"Failed to read configuration file {file_path}: {e}",
                config_key=str(file_path),
                original_error=e,
            ) from e

        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)


__all__ = ["Settings"]

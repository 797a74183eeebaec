"""Configuration models, one per domain."""

from __future__ import annotations

from .app_settings import AppSettings, LoggingSettings
from .cache_settings import CacheSettings
from .search_settings import (
    GeocoderSettings,
    RegistrySettings,
    SearchSettings,
    StoreSettings,
)

__all__ = [
    "AppSettings",
    "CacheSettings",
    "GeocoderSettings",
    "LoggingSettings",
    "RegistrySettings",
    "SearchSettings",
    "StoreSettings",
]

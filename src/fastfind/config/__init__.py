"""FastFind Configuration Module

Settings facade, domain models and loader functions.
"""

from __future__ import annotations

from .models import (
    AppSettings,
    CacheSettings,
    GeocoderSettings,
    LoggingSettings,
    RegistrySettings,
    SearchSettings,
    StoreSettings,
)
from .models.settings import Settings
from .loader import get_config, load_settings, reload_config

__all__ = [
    "AppSettings",
    "CacheSettings",
    "GeocoderSettings",
    "LoggingSettings",
    "RegistrySettings",
    "SearchSettings",
    "Settings",
    "StoreSettings",
    "get_config",
    "load_settings",
    "reload_config",
]

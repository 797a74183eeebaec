"""
System Configuration Constants

This module contains constants for application metadata, file locations,
timeouts, and logging defaults.
"""

# =============================================================================
# BASE CONSTANTS (Foundation values used by other constants)
# =============================================================================

BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE


class Application:
    """Application metadata constants."""

    NAME = "FastFind"
    VERSION = "1.0.0"
    DESCRIPTION = "Geo-proximity event search with per-city read-through caching"


class FileSystem:
    """File and path configuration constants."""

    HOME_DIR = ".fastfind"
    CONFIG_FILE = "config.toml"
    CACHE_DB_FILE = "cache/proximity_cache.db"
    EVENTS_FILE = "data/events.json"
    ENV_FILE = ".env"


class Timeout:
    """Timeout constants (seconds)."""

    STORE = 5.0
    GEOCODER = 10.0


class Logging:
    """Logging defaults."""

    DEFAULT_LEVEL = "INFO"
    DEFAULT_FILE_PATH = "logs/fastfind.log"

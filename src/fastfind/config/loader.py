"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from the .env file
- Configuration file loading from TOML
- Thread-safe singleton access to the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv

from fastfind.config.models.settings import Settings
from fastfind.shared.constants import FileSystem

logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Locations searched, in order, when no config path is given."""
    return [
        Path("config") / FileSystem.CONFIG_FILE,
        Path(FileSystem.CONFIG_FILE),
        Path.home() / FileSystem.HOME_DIR / FileSystem.CONFIG_FILE,
    ]


def _load_env_file(env_file: Path | None = None) -> None:
    """Load variables from .env without overriding the real environment."""
    env_file = env_file or Path(FileSystem.ENV_FILE)
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file or the environment.

    Args:
        config_path: Optional TOML path. If None, the default locations are
            tried in order, then environment variables alone.

    Returns:
        Settings instance

    Raises:
        ApplicationError: If an explicit config file is missing or unreadable
        pydantic.ValidationError: If a configured value is invalid
    """
    _load_env_file()

    if config_path:
        return Settings.from_toml_file(config_path)

    for candidate in default_config_paths():
        if candidate.exists():
            return Settings.from_toml_file(candidate)

    return Settings()


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking so the common path takes no lock.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Return the global settings, loading them on first use."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()
        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings from disk and environment."""
        with self._lock:
            self._instance = load_settings(config_path)
        return self._instance


_loader = SettingsLoader()


def get_config() -> Settings:
    """Return the global Settings instance."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global Settings instance."""
    return _loader.reload_config(config_path)

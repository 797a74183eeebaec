"""Tests for settings models and the loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fastfind.config import Settings, load_settings
from fastfind.config.loader import SettingsLoader
from fastfind.shared.errors import ApplicationError, ErrorCode


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an empty directory with no FASTFIND_ variables."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("FASTFIND_CACHE__BACKEND", "FASTFIND_STORE__TIMEOUT_SECONDS", "FASTFIND_SEARCH__MAX_RESULTS"):
        # setenv first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


class TestSettingsValidation:
    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(cache={"backend": "memcached"})

    def test_key_prefix_is_fixed(self) -> None:
        with pytest.raises(ValidationError):
            Settings(cache={"key_prefix": "events:"})

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(store={"timeout_seconds": 0})

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(logging={"level": "chatty"})

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.cache.backend == "sqlite"
        assert settings.cache.key_prefix == "events:location:"
        assert settings.search.max_results == 50
        assert settings.search.default_radius_km == 10.0
        assert settings.geocoder.enabled is False
        assert settings.registry.cities_file is None


class TestEnvironmentOverrides:
    def test_nested_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FASTFIND_CACHE__BACKEND", "redis")
        monkeypatch.setenv("FASTFIND_SEARCH__MAX_RESULTS", "20")

        settings = Settings()

        assert settings.cache.backend == "redis"
        assert settings.search.max_results == 20


class TestLoadSettings:
    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ApplicationError) as exc_info:
            load_settings(tmp_path / "nope.toml")

        assert exc_info.value.code == ErrorCode.CONFIG_MISSING

    def test_explicit_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[cache\nbackend = ", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_falls_back_to_environment(self) -> None:
        assert load_settings().cache.backend == "sqlite"

    def test_reads_default_location(self, isolated_cwd: Path) -> None:
        # Given
        config_dir = isolated_cwd / "config"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(
            '[search]\nmax_results = 7\n\n[store]\nevents_file = "events.json"\n',
            encoding="utf-8",
        )

        # When
        settings = load_settings()

        # Then
        assert settings.search.max_results == 7
        assert settings.store.events_file == "events.json"

    def test_explicit_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[cache]\nbackend = "redis"\nredis_url = "redis://cache:6379/2"\n', encoding="utf-8")

        settings = load_settings(path)

        assert settings.cache.backend == "redis"
        assert settings.cache.redis_url == "redis://cache:6379/2"

    def test_dotenv_file_is_loaded(self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (isolated_cwd / ".env").write_text("FASTFIND_STORE__TIMEOUT_SECONDS=2.5\n", encoding="utf-8")

        settings = load_settings()

        assert settings.store.timeout_seconds == 2.5


class TestSettingsLoader:
    def test_get_config_is_cached(self) -> None:
        loader = SettingsLoader()

        first = loader.get_config()

        assert loader.get_config() is first
        assert loader.reload_config() is not first
